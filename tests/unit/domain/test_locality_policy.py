"""Tests for the locality check applied to provider matches."""

import pytest

from geo_resolver.domain.policies.locality import (
    cities_equivalent,
    normalize_text,
    state_code,
    states_equivalent,
    validate_locality,
)


def test_normalize_text_strips_accents_and_punctuation():
    assert normalize_text("  São Paulo - SP ") == "sao paulo sp"


@pytest.mark.parametrize(
    "raw, code",
    [
        ("SP", "sp"),
        ("São Paulo", "sp"),
        ("BR-SP", "sp"),
        ("Rio de Janeiro", "rj"),
        ("Estado de São Paulo", "sp"),
        ("Estado do Rio de Janeiro", "rj"),
        ("Estado da Bahia", "ba"),
        ("Estado da Paraíba", "pb"),
        ("Atlantis", None),
    ],
)
def test_state_code(raw, code):
    assert state_code(raw) == code


def test_cities_equivalent_ignores_accents_and_suffix():
    assert cities_equivalent("São Paulo", "Sao Paulo")
    assert cities_equivalent("São Paulo", "São Paulo - SP")
    assert not cities_equivalent("São Paulo", "Campinas")


def test_states_equivalent_code_and_name():
    assert states_equivalent("SP", "São Paulo")
    assert states_equivalent("RJ", "BR-RJ")
    assert not states_equivalent("SP", "Rio de Janeiro")


def test_valid_locality(paulista_address):
    assert validate_locality(paulista_address, "São Paulo", "SP", "Brasil").valid


def test_missing_fields_not_checked(paulista_address):
    assert validate_locality(paulista_address).valid


def test_wrong_country(paulista_address):
    check = validate_locality(paulista_address, "São Paulo", "SP", "Portugal")
    assert not check.valid
    assert "country" in check.reason


def test_wrong_city(paulista_address):
    check = validate_locality(paulista_address, "Campinas", "SP", "br")
    assert not check.valid
    assert "city" in check.reason


def test_wrong_state(paulista_address):
    check = validate_locality(paulista_address, "São Paulo", "MG", "Brazil")
    assert not check.valid
    assert "state" in check.reason
