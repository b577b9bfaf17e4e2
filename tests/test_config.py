import pytest

from ssq_optimizer.config import DEFAULT_CONFIG, load_config


def test_missing_file_returns_defaults(tmp_path):
    config = load_config(str(tmp_path / 'nope.yaml'))
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_partial_override_is_deep_merged(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("generation:\n  iterations: 50\ndata:\n  data_dir: elsewhere\n")
    config = load_config(str(path))
    assert config['generation'] == {'iterations': 50, 'prediction_count': 10}
    assert config['data']['data_dir'] == 'elsewhere'
    assert config['data']['max_records'] == 500
    assert DEFAULT_CONFIG['generation']['iterations'] == 10000


def test_empty_file_returns_defaults(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("")
    assert load_config(str(path)) == DEFAULT_CONFIG


@pytest.mark.parametrize("text", ["generation: [unclosed", "- just\n- a list\n"])
def test_invalid_config_raises(tmp_path, text):
    path = tmp_path / 'config.yaml'
    path.write_text(text)
    with pytest.raises(ValueError):
        load_config(str(path))


def test_defaults_only_carry_used_sections():
    assert set(DEFAULT_CONFIG) == {'data', 'fetch', 'generation', 'logging'}
