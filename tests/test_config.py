"""Tests for the ``@file`` configuration parsing."""

from dynsgs import DynamicSmagorinsky, PeriodicBoxHost, FileArgParser


class TestFileArgParser:

    def test_key_value_lines(self):
        parser = FileArgParser()
        args = parser.convert_arg_line_to_args('kMin = 1e-10  # floor')
        assert args == ['--kMin', '1e-10']

    def test_booleans_and_comments(self):
        parser = FileArgParser()
        assert parser.convert_arg_line_to_args('report_bounds = true') == \
            ['--report_bounds']
        assert parser.convert_arg_line_to_args('report_bounds = False') == \
            ['--no-report_bounds']
        assert parser.convert_arg_line_to_args('# comment only') == []
        assert parser.convert_arg_line_to_args('   ') == []


class TestGetConfig:

    def test_defaults(self):
        config = DynamicSmagorinsky.get_config(args=[])

        assert config.kMin == 1e-15
        assert config.KK_min == 1e-15
        assert config.sigk_inv == 1.0
        assert config.relax_k == 1.0
        assert config.filter_type == 'gaussian'
        assert config.filter_ratio == 2.0
        assert config.report_bounds is False
        assert not hasattr(config, 'init_file')

    def test_config_file(self, tmp_path):
        cfg = tmp_path / 'model.cfg'
        cfg.write_text('# dynamic model\n'
                       'kMin = 1e-10\n'
                       'filter_type = TopHat\n'
                       'report_bounds = true\n'
                       'N = 24\n')

        config = DynamicSmagorinsky.get_config(args=[f'@{cfg}'])
        assert config.kMin == 1e-10
        assert config.filter_type == 'tophat'
        assert config.report_bounds is True

        # host and model options share one command line
        host_config = PeriodicBoxHost.get_config(args=[f'@{cfg}'])
        assert host_config.N == 24
        assert host_config.delta_type == 'cubeRootVol'

    def test_command_line_overrides_file(self, tmp_path):
        cfg = tmp_path / 'model.cfg'
        cfg.write_text('relax_k = 0.7\n')

        config = DynamicSmagorinsky.get_config(
            args=[f'@{cfg}', '--relax_k', '0.9'])
        assert config.relax_k == 0.9
