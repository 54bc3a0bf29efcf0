"""Tests for the schemas module."""

from scaffold.dialects import RUST
from scaffold.document import ArrayNode, ObjectNode, StringNode
from scaffold.schemas import extract_fields, extract_schemas, schema_path

from conftest import make_doc


class TestExtractSchemas:
    """Test schema extraction from full documents."""

    def test_registry_order(self, petstore):
        assert [s.name for s in extract_schemas(petstore)] == ["Pet", "Pets", "Error"]

    def test_pet_fields(self, petstore):
        pet = extract_schemas(petstore)[0]
        assert [f.name for f in pet.fields] == ["id", "name", "tag"]
        by_name = {f.name: f for f in pet.fields}
        assert by_name["id"].required is True
        assert by_name["id"].target_type == "int"
        assert by_name["id"].field_type == "integer"
        assert by_name["tag"].required is False
        assert by_name["tag"].target_type == "Optional[str]"
        assert by_name["tag"].field_type == "string"

    def test_pet_path(self, petstore):
        assert extract_schemas(petstore)[0].path == "/pet"

    def test_array_schema_has_no_fields(self, petstore):
        pets = extract_schemas(petstore)[1]
        assert pets.fields == []
        assert pets.path == "/pets"

    def test_path_schema(self, datasets):
        by_name = {s.name: s for s in extract_schemas(datasets)}
        assert by_name["DatasetPath"].path == "/{dataset}/{version}"
        assert by_name["dataSetList"].path == "/datasetlist"

    def test_class_names(self, datasets):
        by_name = {s.name: s for s in extract_schemas(datasets)}
        assert by_name["dataSetList"].class_name == "DataSetList"
        assert by_name["DatasetPath"].class_name == "DatasetPath"

    def test_nested_array_label(self, datasets):
        listing = {s.name: s for s in extract_schemas(datasets)}["dataSetList"]
        apis = {f.name: f for f in listing.fields}["apis"]
        assert apis.field_type == "array<object>"
        assert apis.target_type == "Optional[list[dict[str, Any]]]"

    def test_rust_rendering(self, petstore):
        pet = extract_schemas(petstore, RUST)[0]
        by_name = {f.name: f for f in pet.fields}
        assert by_name["id"].target_type == "i64"
        assert by_name["tag"].target_type == "Option<String>"

    def test_reference_field(self):
        doc = make_doc({}, schemas={
            "Owner": {"type": "object", "properties": {"name": {"type": "string"}}},
            "Pet": {
                "type": "object",
                "required": ["owner"],
                "properties": {
                    "owner": {"$ref": "#/components/schemas/Owner"},
                    "ghost": {"$ref": "#/components/schemas/Missing"},
                },
            },
        })
        pet = extract_schemas(doc)[1]
        by_name = {f.name: f for f in pet.fields}
        assert by_name["owner"].target_type == "Owner"
        assert by_name["ghost"].target_type == "Optional[Any]"

    def test_reserved_field_identifier(self):
        doc = make_doc({}, schemas={"Thing": {"type": "object", "properties": {"from": {"type": "string"}}}})
        field = extract_schemas(doc)[0].fields[0]
        assert field.name == "from"
        assert field.ident == "from_"

    def test_schema_named_like_an_import(self):
        doc = make_doc({}, schemas={
            "Query": {"type": "object", "properties": {"q": {"type": "string"}}},
            "Search": {"type": "object", "required": ["query"], "properties": {
                "query": {"$ref": "#/components/schemas/Query"},
            }},
        })
        query, search = extract_schemas(doc)
        assert query.class_name == "Query_"
        assert search.fields[0].target_type == "Query_"

    def test_titled_inline_object_field_is_dynamic(self):
        doc = make_doc({}, schemas={"Pet": {"type": "object", "properties": {
            "owner": {"type": "object", "title": "Owner", "properties": {"name": {"type": "string"}}},
        }}})
        owner = extract_schemas(doc)[0].fields[0]
        assert owner.field_type == "Owner"
        assert owner.target_type == "Optional[Any]"

    def test_empty_registry(self, empty_doc):
        assert extract_schemas(empty_doc) == []


class TestExtractFields:

    def test_non_object(self):
        assert extract_fields(ArrayNode(item=StringNode()), {}) == []

    def test_object_without_properties(self):
        assert extract_fields(ObjectNode(), {}) == []


class TestSchemaPath:

    def test_plain(self):
        assert schema_path("Pet", ["id"]) == "/pet"

    def test_path_in_name(self):
        assert schema_path("ItemPath", ["a", "b"]) == "/{a}/{b}"

    def test_path_without_fields(self):
        assert schema_path("path", []) == "/"
