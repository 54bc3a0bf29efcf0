"""Tests for the type_mapper module."""

from scaffold.document import (
    AllOfNode,
    ArrayNode,
    BooleanNode,
    IntegerNode,
    NumberNode,
    ObjectNode,
    OneOfNode,
    ReferenceNode,
    StringNode,
    UnknownNode,
)
from scaffold.type_mapper import (
    DYNAMIC,
    IntersectionType,
    MapType,
    OptionalType,
    ScalarType,
    SequenceType,
    StructType,
    UnionType,
    map_type,
    optional,
    type_name,
    unwrap,
)

_REGISTRY = {"Pet": ObjectNode(), "Error": ObjectNode()}


class TestMapType:
    """Test schema node -> descriptor mapping."""

    def test_scalars(self):
        assert map_type(StringNode()) == ScalarType("string")
        assert map_type(NumberNode()) == ScalarType("number")
        assert map_type(IntegerNode()) == ScalarType("integer")
        assert map_type(BooleanNode()) == ScalarType("boolean")

    def test_array_of_strings(self):
        assert map_type(ArrayNode(item=StringNode())) == SequenceType(ScalarType("string"))

    def test_array_without_items(self):
        assert map_type(ArrayNode()) == SequenceType(None)

    def test_titled_object(self):
        assert map_type(ObjectNode(title="pet")) == StructType("Pet")

    def test_untitled_object(self):
        assert map_type(ObjectNode()) == MapType()

    def test_one_of(self):
        node = OneOfNode(variants=(StringNode(), IntegerNode()))
        descriptor = map_type(node)
        assert descriptor == UnionType((ScalarType("string"), ScalarType("integer")))
        assert descriptor.label == "string or integer"

    def test_all_of(self):
        node = AllOfNode(variants=(ReferenceNode(ref="#/components/schemas/Pet"), ObjectNode()))
        descriptor = map_type(node, _REGISTRY)
        assert isinstance(descriptor, IntersectionType)
        assert descriptor.label == "Pet and object"

    def test_single_variant_collapses(self):
        assert map_type(OneOfNode(variants=(StringNode(),))) == ScalarType("string")

    def test_empty_composition_is_dynamic(self):
        assert map_type(OneOfNode()) == DYNAMIC

    def test_reference_uses_last_segment(self):
        assert map_type(ReferenceNode(ref="#/components/schemas/Pet")) == StructType("Pet")

    def test_reference_capitalized(self):
        assert map_type(ReferenceNode(ref="#/components/schemas/dataSetList")) == StructType("DataSetList")

    def test_unresolved_reference_is_dynamic(self):
        node = ReferenceNode(ref="#/components/schemas/Missing")
        assert map_type(node, _REGISTRY) == DYNAMIC

    def test_reference_without_registry_is_not_checked(self):
        assert map_type(ReferenceNode(ref="#/components/schemas/Missing")) == StructType("Missing")

    def test_unknown_and_none_are_dynamic(self):
        assert map_type(UnknownNode()) == DYNAMIC
        assert map_type(None) == DYNAMIC

    def test_empty_reference_is_dynamic(self):
        assert map_type(ReferenceNode(ref="")) == DYNAMIC


class TestOptional:

    def test_wraps(self):
        assert optional(ScalarType("string")) == OptionalType(ScalarType("string"))

    def test_no_double_wrap(self):
        wrapped = optional(ScalarType("string"))
        assert optional(wrapped) is wrapped

    def test_unwrap(self):
        assert unwrap(optional(MapType())) == MapType()
        assert unwrap(MapType()) == MapType()


class TestLabels:

    def test_sequence_labels(self):
        assert SequenceType(ScalarType("string")).label == "array<string>"
        assert SequenceType(None).label == "array<any>"

    def test_optional_label(self):
        assert optional(StructType("Pet")).label == "optional<Pet>"


class TestTypeName:

    def test_capitalizes(self):
        assert type_name("pet") == "Pet"

    def test_keeps_inner_case(self):
        assert type_name("dataSetList") == "DataSetList"

    def test_separators(self):
        assert type_name("pet-store_item") == "PetStoreItem"

    def test_leading_digit(self):
        assert type_name("3dModel") == "T3dModel"

    def test_empty(self):
        assert type_name("") == ""
