from interfacedesign.core.config import Settings


def test_defaults():
    settings = Settings()

    assert settings.API_PREFIX == "/api"
    assert settings.SUPPORTED_LANGUAGES == ["de", "en"]
    assert settings.DEFAULT_LANGUAGE == "de"
    assert settings.INTERFACE_DESIGN_FOLDER == "interfacedesign"


def test_comma_separated_lists():
    settings = Settings(
        SUPPORTED_LANGUAGES="de, en ,fr",
        BACKEND_CORS_ORIGINS="http://a.test, http://b.test",
    )

    assert settings.SUPPORTED_LANGUAGES == ["de", "en", "fr"]
    assert settings.BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]
