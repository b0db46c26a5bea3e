from beaver.config import Settings


def test_from_env_reads_keys_and_tunables() -> None:
    settings = Settings.from_env(
        {
            "EXA_API_KEY": "exa",
            "OPENAI_API_KEY": "sk",
            "GOOGLE_MAPS_API_KEY": "maps",
            "OPENAI_MODEL": "gpt-4o-mini",
            "LLM_TEMPERATURE": "0.2",
            "MAX_LOCATIONS": "5",
            "BEAVER_API_URL": "http://api.internal:9000",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.exa_api_key == "exa"
    assert settings.openai_api_key == "sk"
    assert settings.google_maps_api_key == "maps"
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.llm_temperature == 0.2
    assert settings.max_locations == 5
    assert settings.api_url == "http://api.internal:9000"
    assert settings.log_level == "DEBUG"


def test_from_env_defaults_and_bad_numbers() -> None:
    settings = Settings.from_env({"LLM_TEMPERATURE": "warm", "GOOGLE_MAPS_SEARCH_RADIUS": "far", "EXA_API_KEY": ""})

    assert settings.exa_api_key is None
    assert settings.llm_temperature == 0.7
    assert settings.google_maps_search_radius == 10000
    assert settings.openai_model == "gpt-4"


def test_search_timeout_is_configurable() -> None:
    assert Settings.from_env({}).search_timeout == 5.0
    assert Settings.from_env({"SEARCH_TIMEOUT": "2.5"}).search_timeout == 2.5
