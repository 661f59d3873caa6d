from hexflash.config import AppConfig, PhysicsConfig, SPRING_CONSTANT


def _clean_env(monkeypatch):
    for name in ("GEMINI_API_KEY", "API_KEY", "HEXFLASH_MODEL",
                 "HEXFLASH_LANGUAGE", "HEXFLASH_LOG_LEVEL"):
        # setenv first so monkeypatch unsets it again on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_from_env_reads_settings(monkeypatch, tmp_path):
    _clean_env(monkeypatch)
    monkeypatch.setenv("GEMINI_API_KEY", "abc123")
    monkeypatch.setenv("HEXFLASH_LANGUAGE", "ko")
    monkeypatch.setenv("HEXFLASH_LOG_LEVEL", "debug")
    cfg = AppConfig.from_env(str(tmp_path / ".env"))
    assert cfg.api_key == "abc123"
    assert cfg.has_api_key
    assert cfg.language == "ko"
    assert cfg.log_level == "DEBUG"
    assert cfg.model == AppConfig.model


def test_placeholder_key_counts_as_missing(monkeypatch, tmp_path):
    _clean_env(monkeypatch)
    monkeypatch.setenv("API_KEY", "PLACEHOLDER_API_KEY")
    cfg = AppConfig.from_env(str(tmp_path / ".env"))
    assert cfg.api_key is None
    assert not cfg.has_api_key


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    _clean_env(monkeypatch)
    env = tmp_path / ".env"
    env.write_text("GEMINI_API_KEY=from-file\nHEXFLASH_MODEL=gemini-test\n")
    cfg = AppConfig.from_env(str(env))
    assert cfg.api_key == "from-file"
    assert cfg.model == "gemini-test"


def test_physics_defaults():
    assert PhysicsConfig().spring_constant == SPRING_CONSTANT
