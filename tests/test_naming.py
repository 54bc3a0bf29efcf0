"""Tests for the naming module."""

import pytest

from scaffold.naming import (
    normalize,
    normalize_handler,
    route_handler_name,
    snake_case,
)

# Literal cases; any new ambiguous input belongs in this table
_NORMALIZE_CASES = [
    (
        "get_api_v4_network_validators_validatorsByClusterHash_clusterHash",
        "get_network_validators_validators_by_cluster_hash_cluster_hash",
    ),
    ("get_api_v4_network_validators", "get_network_validators"),
    ("get_api_v4_network", "get_network"),
    ("search_controller_search", "search_controller"),
    ("get_api_v4", "get"),
    ("get_api", "get"),
    ("get", "get"),
    ("", ""),
    ("post_pets", "create_pets"),
    ("postPets", "create_pets"),
    ("get_get_pets", "get_pets"),
    ("listPets", "list_pets"),
    ("showPetById", "show_pet_by_id"),
    ("list-data-sets", "list_data_sets"),
    ("get_api_v4_{network}_accounts_{ownerAddress}", "get_network_accounts_owner_address"),
    ("_leading_and_trailing_", "leading_and_trailing"),
    ("HTTPResponseCode", "http_response_code"),
]


class TestNormalize:
    """Test the ordered rewrite rules."""

    @pytest.mark.parametrize("raw,expected", _NORMALIZE_CASES)
    def test_literal_cases(self, raw, expected):
        assert normalize(raw) == expected

    @pytest.mark.parametrize("raw,_expected", _NORMALIZE_CASES)
    def test_idempotent(self, raw, _expected):
        once = normalize(raw)
        assert normalize(once) == once

    @pytest.mark.parametrize("raw", [
        "aapipi",
        "search_search_search",
        "get_get_get",
        "post_post_items",
        "v4v4_api_api_x",
        "api__v4__",
    ])
    def test_idempotent_on_nested_noise(self, raw):
        """Removing one noise token can expose another; the result must still be stable."""
        once = normalize(raw)
        assert normalize(once) == once

    def test_no_double_separators(self):
        assert "__" not in normalize("get__api__v4__things")

    def test_noise_removed_inside_words(self):
        """Noise stripping is plain substring removal, not segment aware."""
        assert normalize("get_capital") == "get_cital"

    def test_collisions_are_possible(self):
        assert normalize("get_api_pets") == normalize("get_pets")


class TestNormalizeHandler:
    """Test function names from method + path or operationId."""

    def test_operation_id_wins(self):
        assert normalize_handler("get", "/pets", "listPets") == "list_pets"

    def test_path_slug_without_operation_id(self):
        assert normalize_handler("GET", "/pets/{petId}") == "get_pets_pet_id"

    def test_post_becomes_create(self):
        assert normalize_handler("POST", "/pets") == "create_pets"

    def test_root_path(self):
        assert normalize_handler("GET", "/") == "get"

    def test_versioned_path(self):
        assert normalize_handler("GET", "/api/v4/{network}/clusters") == "get_network_clusters"


class TestRouteHandlerName:
    """Test route handler names."""

    def test_collection(self):
        assert route_handler_name("get", "/pets") == "handle_get_pets"

    def test_post_collection(self):
        assert route_handler_name("post", "/pets") == "handle_post_pets"

    def test_path_parameter_lowercased(self):
        assert route_handler_name("get", "/pets/{petId}") == "handle_get_pets_petid"

    def test_root(self):
        assert route_handler_name("GET", "/") == "handle_get_root"

    def test_hyphenated_segment_is_identifier(self):
        name = route_handler_name("get", "/pet-store/{store-id}")
        assert name == "handle_get_pet_store_store_id"
        assert name.isidentifier()


class TestSnakeCase:

    def test_camel(self):
        assert snake_case("validatorsByClusterHash") == "validators_by_cluster_hash"

    def test_non_alphanumeric_runs(self):
        assert snake_case("a-b.c{d}") == "a_b_c_d_"
