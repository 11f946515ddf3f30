"""
상품 필드 검증/정규화 규칙 테스트
"""

import math
import uuid

import pytest

from app.core.exceptions import InvalidProductIdException
from app.models.product_rules import (
    capitalize_name,
    normalize_fields,
    parse_product_id,
    round_price,
    validate_fields,
)

VALID_FIELDS = {
    "name": "tv",
    "description": "a flat screen tv",
    "price": 199.999,
}


class TestValidateFields:
    """validate_fields 테스트"""

    def test_valid_fields(self):
        assert validate_fields(VALID_FIELDS) == []

    def test_missing_required_fields_on_create(self):
        violations = validate_fields({})

        assert violations == [
            "El nombre es requerido",
            "La descripción es requerida",
            "El precio es requerido",
        ]

    def test_partial_ignores_missing_fields(self):
        assert validate_fields({"price": 10}, partial=True) == []

    def test_partial_still_checks_provided_fields(self):
        violations = validate_fields({"name": "x"}, partial=True)

        assert violations == ["El nombre debe tener al menos 2 caracteres"]

    def test_name_is_checked_after_trim(self):
        violations = validate_fields({**VALID_FIELDS, "name": "  a  "})

        assert violations == ["El nombre debe tener al menos 2 caracteres"]

    def test_blank_name_is_missing(self):
        violations = validate_fields({**VALID_FIELDS, "name": "   "})

        assert violations == ["El nombre es requerido"]

    def test_name_too_long(self):
        violations = validate_fields({**VALID_FIELDS, "name": "n" * 101})

        assert violations == ["El nombre no puede exceder 100 caracteres"]

    def test_name_wrong_type(self):
        violations = validate_fields({**VALID_FIELDS, "name": 42})

        assert violations == ["El nombre debe ser texto"]

    @pytest.mark.parametrize(
        "description, expected",
        [
            ("too short", "La descripción debe tener al menos 10 caracteres"),
            ("d" * 501, "La descripción no puede exceder 500 caracteres"),
        ],
    )
    def test_description_length(self, description, expected):
        violations = validate_fields({**VALID_FIELDS, "description": description})

        assert violations == [expected]

    @pytest.mark.parametrize(
        "price, expected",
        [
            (-0.01, "El precio debe ser mayor o igual a 0"),
            (math.nan, "El precio debe ser un número válido mayor o igual a 0"),
            (math.inf, "El precio debe ser un número válido mayor o igual a 0"),
            ("10", "El precio debe ser un número válido mayor o igual a 0"),
            (True, "El precio debe ser un número válido mayor o igual a 0"),
        ],
    )
    def test_invalid_price(self, price, expected):
        violations = validate_fields({**VALID_FIELDS, "price": price})

        assert violations == [expected]

    def test_zero_price_is_valid(self):
        assert validate_fields({**VALID_FIELDS, "price": 0}) == []

    @pytest.mark.parametrize(
        "stock, expected",
        [
            (-1, "El stock debe ser mayor o igual a 0"),
            (1.5, "El stock debe ser un número entero"),
            ("3", "El stock debe ser un número entero"),
            (None, "El stock es requerido"),
        ],
    )
    def test_invalid_stock(self, stock, expected):
        violations = validate_fields({**VALID_FIELDS, "stock": stock})

        assert violations == [expected]

    def test_integer_valued_float_stock_is_valid(self):
        assert validate_fields({**VALID_FIELDS, "stock": 3.0}) == []

    def test_collects_all_violations(self):
        violations = validate_fields(
            {"name": "x", "description": "short", "price": -1, "stock": -1}
        )

        assert len(violations) == 4

    def test_unknown_fields_are_ignored(self):
        assert validate_fields({**VALID_FIELDS, "color": "red"}) == []


class TestNormalizeFields:
    """normalize_fields 테스트"""

    def test_normalizes_all_fields(self):
        normalized = normalize_fields(
            {
                "name": "  fLAT tv ",
                "description": "  a flat screen tv  ",
                "price": 199.999,
                "stock": 3.0,
            }
        )

        assert normalized == {
            "name": "Flat tv",
            "description": "a flat screen tv",
            "price": 200.0,
            "stock": 3,
        }
        assert isinstance(normalized["stock"], int)

    def test_only_provided_fields(self):
        assert normalize_fields({"price": 19.999}) == {"price": 20.0}

    def test_input_is_not_mutated(self):
        fields = {"name": "tv"}
        normalize_fields(fields)

        assert fields == {"name": "tv"}

    def test_capitalize_name(self):
        assert capitalize_name("tV sET") == "Tv set"
        assert capitalize_name("") == ""

    @pytest.mark.parametrize(
        "price, expected",
        [(199.999, 200.0), (10.125, 10.13), (10.124, 10.12), (0, 0.0), (5, 5.0)],
    )
    def test_round_price(self, price, expected):
        assert round_price(price) == expected


class TestParseProductId:
    """parse_product_id 테스트"""

    def test_hex_id(self):
        raw = uuid.uuid4().hex

        assert parse_product_id(raw) == raw

    def test_hyphenated_id_is_canonicalized(self):
        value = uuid.uuid4()

        assert parse_product_id(str(value)) == value.hex

    @pytest.mark.parametrize("raw", ["not-a-valid-id", "123", ""])
    def test_malformed_id(self, raw):
        with pytest.raises(InvalidProductIdException):
            parse_product_id(raw)


class TestExtremeNumbers:
    """float 범위 경계의 가격/재고 테스트"""

    def test_huge_finite_price_is_valid_and_kept(self):
        fields = {**VALID_FIELDS, "price": 1e307}

        assert validate_fields(fields) == []
        assert normalize_fields(fields)["price"] == 1e307

    def test_price_beyond_float_range_is_violation(self):
        violations = validate_fields({"price": 10**400}, partial=True)

        assert violations == ["El precio debe ser un número válido mayor o igual a 0"]

    def test_stock_beyond_storage_range_is_violation(self):
        violations = validate_fields({"stock": 2**63}, partial=True)

        assert violations == [f"El stock no puede exceder {2**63 - 1}"]

    def test_half_cent_rounds_up(self):
        assert round_price(1.005) == 1.01
        assert round_price(2.675) == 2.68
