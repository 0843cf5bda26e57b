from soilcarbon_intel.config import Settings, load_settings


def test_log_level_is_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"
    assert Settings(log_level=" warning ").log_level == "WARNING"

def test_unknown_log_level_falls_back_to_info():
    assert Settings(log_level="verbose").log_level == "INFO"

def test_load_settings_reads_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("GEMINI_API_KEY", "API_KEY", "GOOGLE_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("API_KEY", "secret")
    monkeypatch.setenv("SOILCARBON_MODEL", "gemini-test")
    monkeypatch.setenv("SOILCARBON_EXPORT_DIR", str(tmp_path / "out"))
    monkeypatch.setenv("SOILCARBON_LOG_LEVEL", "verbose")

    settings = load_settings()
    assert settings.api_key == "secret"
    assert settings.api_key_configured
    assert settings.model == "gemini-test"
    assert settings.export_dir == tmp_path / "out"
    assert settings.log_level == "INFO"
