import pytest

from restdoc.collector.base import EndpointResolver, join_paths, normalize_path, resolve_paths
from restdoc.collector.jaxrs import JaxRsDialect
from restdoc.collector.registry import get_dialects, resolve_all
from restdoc.collector.spring import CONTROLLER_ANNOTATIONS, MAPPING_ANNOTATION, SpringDialect
from restdoc.errors import InheritanceCycleError
from restdoc.model.base import EndpointMapping
from restdoc.model.code import CodeModel

CONTROLLER = CONTROLLER_ANNOTATIONS[0]


def _mapping(**values) -> dict:
    return {"name": MAPPING_ANNOTATION, "values": values}


def _model(*classes: dict) -> CodeModel:
    return CodeModel.model_validate({"classes": list(classes)})


def _controller(name="a.Ctl", doc="", mapping=None, methods=(), superclass=None) -> dict:
    annotations = [CONTROLLER]
    if mapping is not None:
        annotations.append(_mapping(**mapping))
    return {
        "qualified_name": name,
        "doc": doc,
        "annotations": annotations,
        "methods": list(methods),
        "superclass": superclass,
    }


def _method(name="m", doc="", **mapping) -> dict:
    return {"name": name, "doc": doc, "annotations": [_mapping(**mapping)]}


def _spring(model: CodeModel):
    return EndpointResolver(SpringDialect()).resolve(model)


class TestPaths:
    def test_normalize_adds_leading_slash(self):
        assert normalize_path("users") == "/users"

    def test_normalize_collapses_repeated_slashes(self):
        assert normalize_path("//api///users//x") == "/api/users/x"

    def test_normalize_empty_is_root(self):
        assert normalize_path("") == "/"

    def test_join_skips_empty_segments(self):
        assert join_paths("", "/a/", "/x") == "/a/x"
        assert join_paths("ctx", "a", "x") == "/ctx/a/x"

    def test_cross_product(self):
        paths = resolve_paths(
            "/ctx",
            EndpointMapping.of(paths=["/a", "/b"]),
            EndpointMapping.of(paths=["/x", "/y"]),
        )
        assert set(paths) == {"/ctx/a/x", "/ctx/a/y", "/ctx/b/x", "/ctx/b/y"}
        assert len(paths) == 4

    def test_only_method_paths(self):
        assert resolve_paths("/ctx/", EndpointMapping(), EndpointMapping.of(paths=["/x"])) == ("/ctx/x",)

    def test_only_class_paths(self):
        assert resolve_paths("", EndpointMapping.of(paths=["/a"]), EndpointMapping()) == ("/a",)

    def test_no_paths_is_context_path(self):
        assert resolve_paths("/ctx", EndpointMapping(), EndpointMapping()) == ("/ctx",)
        assert resolve_paths("", EndpointMapping(), EndpointMapping()) == ("/",)

    def test_duplicate_results_collapse(self):
        paths = resolve_paths("", EndpointMapping.of(paths=["/a", "/a/"]), EndpointMapping.of(paths=["/x"]))
        assert paths == ("/a/x",)


class TestClassSelection:
    def test_unqualified_class_produces_nothing(self):
        model = _model({"qualified_name": "a.Service", "methods": [_method(value="/x")]})
        assert resolve_all(model) == []

    def test_ignore_tag_on_class(self):
        model = _model(_controller(doc="Hidden.\n@ignore", methods=[_method(value="/x")]))
        assert _spring(model) == []

    def test_class_without_endpoints_dropped(self):
        model = _model(_controller(methods=[{"name": "helper"}]))
        assert _spring(model) == []

    def test_descriptor_defaults(self):
        model = _model(_controller(name="a.UserController", doc="Users. All of them.", methods=[_method(value="/u")]))
        [descriptor] = _spring(model)
        assert descriptor.name == "a.UserController"
        assert descriptor.context_path == ""
        assert descriptor.description == "Users. All of them."

    def test_name_and_context_path_tags(self):
        doc = "Users.\n@name User API\n@contextPath /api/v1"
        model = _model(_controller(doc=doc, methods=[_method(value="/u")]))
        [descriptor] = _spring(model)
        assert descriptor.name == "User API"
        assert descriptor.context_path == "/api/v1"
        assert descriptor.endpoints[0].path == "/api/v1/u"

    def test_null_name_and_context_path_tags_fall_back(self):
        controller = _controller(name="a.UserController", methods=[_method(value="/x")])
        controller["doc"] = {"body": "Users.", "tags": {"contextPath": None, "name": None}}
        [descriptor] = _spring(_model(controller))
        assert descriptor.name == "a.UserController"
        assert descriptor.context_path == ""
        assert descriptor.endpoints[0].path == "/x"


class TestMethodResolution:
    def test_ignore_tag_on_method(self):
        model = _model(_controller(methods=[_method("a", value="/a"), _method("b", doc="@ignore", value="/b")]))
        [descriptor] = _spring(model)
        assert [e.path for e in descriptor.endpoints] == ["/a"]

    def test_one_endpoint_per_verb_and_path(self):
        model = _model(
            _controller(
                mapping={"value": ["/foo", "/bar"]},
                methods=[_method(value="/c", method=["RequestMethod.POST", "RequestMethod.PUT"])],
            )
        )
        [descriptor] = _spring(model)
        assert [(e.http_method, e.path) for e in descriptor.endpoints] == [
            ("POST", "/foo/c"),
            ("POST", "/bar/c"),
            ("PUT", "/foo/c"),
            ("PUT", "/bar/c"),
        ]

    def test_default_verb_is_get(self):
        model = _model(_controller(mapping={"value": "/a"}, methods=[_method(value="/x")]))
        [descriptor] = _spring(model)
        assert {e.http_method for e in descriptor.endpoints} == {"GET"}

    def test_class_verbs_used_when_method_has_none(self):
        model = _model(_controller(mapping={"method": "DELETE"}, methods=[_method(value="/x")]))
        [descriptor] = _spring(model)
        assert descriptor.endpoints[0].http_method == "DELETE"

    def test_media_types_fall_back_to_class(self):
        model = _model(
            _controller(
                mapping={"consumes": "application/xml", "produces": "application/xml"},
                methods=[_method("a", value="/a", produces="text/plain"), _method("b", value="/b")],
            )
        )
        [descriptor] = _spring(model)
        a, b = descriptor.endpoints
        assert a.consumes == ("application/xml",)
        assert a.produces == ("text/plain",)
        assert b.produces == ("application/xml",)

    def test_summary_and_description_from_doc(self):
        model = _model(_controller(methods=[_method(doc="Adds things. Carefully.\n@param x x", value="/a")]))
        [descriptor] = _spring(model)
        assert descriptor.endpoints[0].summary == "Adds things."
        assert descriptor.endpoints[0].description == "Adds things. Carefully."


class TestInheritance:
    def test_inherited_method_uses_subclass_context_path(self):
        base = _controller(name="a.Base", doc="@contextPath /base", methods=[_method("ping", value="/ping")])
        child = _controller(name="a.Child", doc="@contextPath /child", superclass="a.Base")
        descriptors = _spring(_model(base, child))
        child_descriptor = [d for d in descriptors if d.name == "a.Child"][0]
        assert [e.path for e in child_descriptor.endpoints] == ["/child/ping"]

    def test_subclass_mapping_applies_to_inherited_methods(self):
        base = {"qualified_name": "a.Base", "methods": [_method("ping", value="/ping")]}
        child = _controller(name="a.Child", mapping={"value": "/v2"}, superclass="a.Base")
        [descriptor] = _spring(_model(base, child))
        assert descriptor.endpoints[0].path == "/v2/ping"

    def test_walks_whole_chain(self):
        root = {"qualified_name": "a.Root", "methods": [_method("r", value="/r")]}
        mid = {"qualified_name": "a.Mid", "superclass": "a.Root", "methods": [_method("m", value="/m")]}
        leaf = _controller(name="a.Leaf", superclass="a.Mid", methods=[_method("l", value="/l")])
        [descriptor] = _spring(_model(root, mid, leaf))
        assert [e.path for e in descriptor.endpoints] == ["/l", "/m", "/r"]

    def test_identical_inherited_endpoint_deduplicated(self):
        base = {"qualified_name": "a.Base", "methods": [_method("ping", value="/ping")]}
        child = _controller(name="a.Child", superclass="a.Base", methods=[_method("ping", value="/ping")])
        [descriptor] = _spring(_model(base, child))
        assert len(descriptor.endpoints) == 1

    def test_external_superclass_terminates(self):
        model = _model(_controller(superclass="java.lang.Object", methods=[_method(value="/x")]))
        assert len(_spring(model)[0].endpoints) == 1

    def test_cycle_skips_class(self):
        a = _controller(name="a.A", superclass="a.B", methods=[_method(value="/a")])
        b = {"qualified_name": "a.B", "superclass": "a.A"}
        ok = _controller(name="a.Ok", methods=[_method(value="/ok")])
        descriptors = _spring(_model(a, b, ok))
        assert [d.name for d in descriptors] == ["a.Ok"]

    def test_cycle_is_fatal_when_strict(self):
        a = _controller(name="a.A", superclass="a.A", methods=[_method(value="/a")])
        with pytest.raises(InheritanceCycleError) as exc_info:
            EndpointResolver(SpringDialect()).resolve(_model(a), strict=True)
        assert exc_info.value.chain == ["a.A", "a.A"]


class TestResolveAll:
    def _mixed_model(self) -> CodeModel:
        return _model(
            _controller(name="a.SpringCtl", methods=[_method(value="/s")]),
            {
                "qualified_name": "a.JaxResource",
                "annotations": [{"name": "javax.ws.rs.Path", "values": {"value": "/j"}}],
                "methods": [{"name": "get", "annotations": ["javax.ws.rs.GET"]}],
            },
        )

    def test_runs_every_dialect(self):
        descriptors = resolve_all(self._mixed_model())
        assert [d.name for d in descriptors] == ["a.SpringCtl", "a.JaxResource"]

    def test_selected_dialects_only(self):
        descriptors = resolve_all(self._mixed_model(), get_dialects(["jaxrs"]))
        assert [d.name for d in descriptors] == ["a.JaxResource"]

    def test_unknown_dialect(self):
        with pytest.raises(ValueError):
            get_dialects(["grpc"])

    def test_idempotent(self):
        model = self._mixed_model()
        assert resolve_all(model) == resolve_all(model)

    def test_parallel_matches_sequential(self):
        classes = [_controller(name=f"a.Ctl{i}", methods=[_method(value=f"/r{i}")]) for i in range(20)]
        model = _model(*classes)
        dialects = [SpringDialect(), JaxRsDialect()]
        assert resolve_all(model, dialects, workers=4) == resolve_all(model, dialects)

    def test_library_use_prints_nothing(self, capsys):
        resolve_all(self._mixed_model())
        assert capsys.readouterr().out == ""
