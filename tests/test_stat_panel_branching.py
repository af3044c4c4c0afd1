from statpanel.panels import stat


def test_branches_from_shared_base_are_independent():
    base = stat.new("Base")
    l1, l2, l3 = ({"title": f"L{i}", "url": f"/{i}"} for i in (1, 2, 3))
    shared = base.add_link(l1)
    left = shared.add_link(l2)
    right = shared.add_link(l3)
    assert left.links == [l1, l2]
    assert right.links == [l1, l3]
    assert shared.links == [l1]
    assert base.links == []


def test_ref_ids_continue_per_branch():
    shared = stat.new("p").add_target({"expr": "a"})
    left = shared.add_target({"expr": "b"})
    right = shared.add_targets([{"expr": "c"}, {"expr": "d"}])
    assert [t["refId"] for t in left.targets] == ["A", "B"]
    assert [t["refId"] for t in right.targets] == ["A", "B", "C"]
    assert shared.next_target == 1


def test_nested_defaults_not_shared_between_branches():
    for version in ("7", "6.7"):
        base = stat.new("p", plugin_version=version)
        red = base.add_threshold({"color": "red", "value": 90}).add_mapping({"text": "hot"})
        blue = base.add_threshold({"color": "blue", "value": 10}).add_data_link({"url": "/cold"})
        assert red.defaults["thresholds"]["steps"] == [{"color": "red", "value": 90}]
        assert blue.defaults["thresholds"]["steps"] == [{"color": "blue", "value": 10}]
        assert blue.defaults["mappings"] == []
        assert red.defaults["links"] == []
        assert base.defaults["thresholds"]["steps"] == []
        assert base.defaults["mappings"] == [] and base.defaults["links"] == []


def test_schema_shape_is_fixed_for_the_panel_lifetime():
    panel = stat.new("p", plugin_version="6.7")
    grown = panel.add_target({}).add_threshold({"color": "green", "value": None}).add_mapping({})
    assert grown.is_legacy
    assert "fieldConfig" not in grown.to_dict()


def test_mutating_to_dict_output_leaves_panel_alone():
    panel = stat.new("p").add_target({"expr": "up"})
    doc = panel.to_dict()
    doc["targets"].append({"expr": "rogue"})
    doc["fieldConfig"]["defaults"]["mappings"].append({"id": 7})
    assert len(panel.targets) == 1
    assert panel.defaults["mappings"] == []


def test_panels_are_hashable_and_expose_no_mutable_doc():
    a = stat.new("p").add_target({"expr": "up"})
    b = stat.new("p").add_target({"expr": "up"})
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert not hasattr(a, "doc")
