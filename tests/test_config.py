from coastline_viewer.config import DEFAULT_USER_AGENT, NOMINATIM_SEARCH_URL, OverlayStyle, Settings


def test_settings_defaults(monkeypatch) -> None:
    for name in (
        "COASTLINE_NOMINATIM_URL",
        "COASTLINE_USER_AGENT",
        "COASTLINE_LOOKUP_TIMEOUT",
        "COASTLINE_MAP_LAT",
        "COASTLINE_MAP_LNG",
        "COASTLINE_MAP_ZOOM",
        "COASTLINE_LOCATE_ZOOM",
        "COASTLINE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.load()

    assert settings.nominatim_url == NOMINATIM_SEARCH_URL
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.lookup_timeout == 30.0
    assert settings.default_center == (36.5, 138.0)
    assert settings.default_zoom == 6
    assert settings.locate_zoom == 13
    assert settings.log_level == "INFO"


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("COASTLINE_USER_AGENT", "MyViewer/2.0")
    monkeypatch.setenv("COASTLINE_LOOKUP_TIMEOUT", "7.5")
    monkeypatch.setenv("COASTLINE_MAP_LAT", "0")
    monkeypatch.setenv("COASTLINE_MAP_LNG", "-45.5")
    monkeypatch.setenv("COASTLINE_MAP_ZOOM", "3")

    settings = Settings.load()

    assert settings.user_agent == "MyViewer/2.0"
    assert settings.lookup_timeout == 7.5
    assert settings.default_center == (0.0, -45.5)
    assert settings.default_zoom == 3


def test_overlay_style_leaflet_keys() -> None:
    assert OverlayStyle().as_leaflet() == {"color": "#3498db", "weight": 2, "fillOpacity": 0.1}
