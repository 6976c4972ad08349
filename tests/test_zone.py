from cfpurge.zone import Zone, ZoneError


def test_serialize_without_parameters_purges_everything():
    assert Zone().serialize() == {"purge_everything": True}


def test_serialize_only_tags():
    assert Zone(tags=["blog"]).serialize() == {"tags": ["blog"]}


def test_serialize_keeps_all_present_filters():
    zone = Zone(files=["https://example.com/a.css"], hosts=["example.com"])
    assert zone.serialize() == {"files": ["https://example.com/a.css"], "hosts": ["example.com"]}


def test_empty_filter_list_is_not_purge_everything():
    zone = Zone(files=[])
    assert zone.parameters == {"files": []}
    assert "purge_everything" not in zone.serialize()


def test_from_config_drops_empty_filters():
    zone = Zone.from_config({"files": [], "tags": ["x"], "hosts": None, "unknown": ["y"]})
    assert zone.parameters == {"tags": ["x"]}


def test_from_config_none_is_empty_zone():
    assert Zone.from_config(None).serialize() == {"purge_everything": True}


def test_replace_parameters_does_not_merge():
    zone = Zone(files=["a"])
    zone.replace_parameters(tags=["x"])
    assert zone.serialize() == {"tags": ["x"]}
    assert zone.files is None


def test_get_returns_default_when_absent():
    zone = Zone(tags=["x"])
    assert zone.get("files", []) == []
    assert zone.get("tags", []) == ["x"]
    assert zone.get("success") is None
    assert zone.get("nonexistent", "fallback") == "fallback"


def test_from_response_ignores_unknown_keys():
    zone = Zone.from_response(
        {
            "success": False,
            "errors": [{"code": 1003, "message": "Invalid zone"}],
            "messages": [],
            "result": None,
        }
    )
    assert zone.success is False
    assert zone.errors == [ZoneError(code=1003, message="Invalid zone")]
    assert zone.parameters == {}


def test_null_errors_become_empty():
    assert Zone.from_response({"success": True, "errors": None}).errors == []
