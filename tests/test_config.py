"""Tests for config module."""

import pytest
from circletransform.config import DEFAULT_CONFIG, TransformConfig, load_config
from circletransform.errors import InvalidConfigError


class TestDefaultConfig:
    """Test default configuration."""
    
    def test_default_config_exists(self):
        """Test that default config exists."""
        assert DEFAULT_CONFIG is not None
        assert isinstance(DEFAULT_CONFIG, dict)
    
    def test_transform_config(self):
        """Test transform section."""
        transform = DEFAULT_CONFIG['transform']
        assert transform['noise'] is None
        assert transform['deinterlace'] is None
        assert transform['threshold_factor'] == 2.0
        assert transform['pixel_offset'] == 1
    
    def test_voting_config(self):
        """Test voting section."""
        voting = DEFAULT_CONFIG['voting']
        assert voting['chunk_size'] > 0
        assert voting['n_jobs'] >= 1
    
    def test_logging_config(self):
        """Test logging section."""
        assert 'level' in DEFAULT_CONFIG['logging']
        assert 'log_file' in DEFAULT_CONFIG['logging']


class TestTransformConfig:
    """Test TransformConfig construction and validation."""
    
    def test_from_dict_defaults(self):
        """Test that an empty dict gives the defaults."""
        cfg = TransformConfig.from_dict(None)
        assert cfg.noise is None
        assert cfg.deinterlace is None
        assert cfg.threshold_factor == 2.0
        assert cfg.pixel_offset == 1
    
    def test_from_dict_overrides(self):
        """Test partial overrides."""
        cfg = TransformConfig.from_dict({'transform': {'noise': 0.5, 'deinterlace': 1},
                                         'voting': {'n_jobs': 2}})
        assert cfg.noise == 0.5
        assert cfg.deinterlace == 1
        assert cfg.n_jobs == 2
        assert cfg.chunk_size == DEFAULT_CONFIG['voting']['chunk_size']
    
    def test_from_dict_does_not_mutate_defaults(self):
        """Test that overrides leave DEFAULT_CONFIG untouched."""
        TransformConfig.from_dict({'transform': {'noise': 3.0}})
        assert DEFAULT_CONFIG['transform']['noise'] is None
    
    def test_unknown_section(self):
        """Test unknown section is rejected."""
        with pytest.raises(InvalidConfigError):
            TransformConfig.from_dict({'radius': {'min': 3}})
    
    def test_unknown_key(self):
        """Test unknown option is rejected."""
        with pytest.raises(InvalidConfigError):
            TransformConfig.from_dict({'transform': {'range': 10}})
    
    @pytest.mark.parametrize('noise', [-1.0, float('nan'), float('inf'), True, '1.0'])
    def test_invalid_noise(self, noise):
        """Test that bad noise values are rejected."""
        with pytest.raises(InvalidConfigError):
            TransformConfig(noise=noise).validate()
    
    @pytest.mark.parametrize('deinterlace', [1.5, True, '0'])
    def test_invalid_deinterlace(self, deinterlace):
        """Test that non-integer parities are rejected."""
        with pytest.raises(InvalidConfigError):
            TransformConfig(deinterlace=deinterlace).validate()
    
    def test_invalid_voting_options(self):
        """Test chunk size and worker count bounds."""
        with pytest.raises(InvalidConfigError):
            TransformConfig(chunk_size=0).validate()
        with pytest.raises(InvalidConfigError):
            TransformConfig(n_jobs=0).validate()
    
    def test_zero_noise_is_valid(self):
        """Test noise of zero is accepted."""
        assert TransformConfig(noise=0).validate().noise == 0
    
    def test_replace(self):
        """Test per-call overrides."""
        cfg = TransformConfig(noise=1.0)
        updated = cfg.replace(noise=None, deinterlace=3)
        assert updated.noise == 1.0
        assert updated.deinterlace == 3
        assert cfg.deinterlace is None
    
    def test_config_errors_are_value_errors(self):
        """Test error type hierarchy."""
        with pytest.raises(ValueError):
            TransformConfig(noise=-2.0).validate()


class TestLoadConfig:
    """Test YAML configuration loading."""
    
    def test_load_config(self, tmp_path):
        """Test loading and merging a YAML file."""
        path = tmp_path / 'config.yaml'
        path.write_text("transform:\n  noise: 2.5\nvoting:\n  n_jobs: 3\n")
        
        config = load_config(str(path))
        assert config['transform']['noise'] == 2.5
        assert config['transform']['pixel_offset'] == 1
        assert config['voting']['n_jobs'] == 3
        
        cfg = TransformConfig.from_dict(config)
        assert cfg.noise == 2.5
        assert cfg.n_jobs == 3
    
    def test_load_empty_file(self, tmp_path):
        """Test an empty file gives the defaults."""
        path = tmp_path / 'empty.yaml'
        path.write_text("")
        assert load_config(str(path)) == DEFAULT_CONFIG
    
    def test_load_missing_file(self, tmp_path):
        """Test a missing file is reported as a config error."""
        with pytest.raises(InvalidConfigError):
            load_config(str(tmp_path / 'missing.yaml'))
    
    def test_load_non_mapping(self, tmp_path):
        """Test a YAML list is rejected."""
        path = tmp_path / 'list.yaml'
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InvalidConfigError):
            load_config(str(path))
