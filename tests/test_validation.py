"""
Tests for thread parameter validation.
"""

import pytest

from threadmesh.calculator.validation import (
    InvalidParameterError,
    Severity,
    ValidationMessage,
    ValidationResult,
    require_valid,
    validate_params,
)


def _codes(result):
    return [m.code for m in result.messages]


class TestValidParams:
    """Defaults and ordinary values produce no findings."""

    def test_defaults_clean(self, default_params):
        result = validate_params(default_params)
        assert result.valid
        assert result.messages == []

    def test_accepts_dict(self):
        """Plain dicts are validated the same way as ThreadParams."""
        result = validate_params({
            "inner_radius": 1.0, "outer_radius": 1.2, "steps_per_turn": 64,
            "turns": 6, "height_per_turn": 0.3, "lead_length": 0.1,
        })
        assert result.valid
        assert result.messages == []

    @pytest.mark.parametrize("data", [
        {"turns": 3},
        {"steps_per_turn": 2},
        {"Thread Radius": 0.8},
        {},
    ])
    def test_partial_dict_matches_params(self, data):
        """Missing dict fields take host defaults, as ThreadParams does."""
        from threadmesh.io import params_from_dict

        from_dict = validate_params(data)
        from_params = validate_params(params_from_dict(data))
        assert from_dict.valid == from_params.valid
        assert _codes(from_dict) == _codes(from_params)

    def test_partial_dict_valid(self):
        result = validate_params({"turns": 3})
        assert result.valid
        assert result.messages == []

    def test_require_valid_returns_result(self, default_params):
        assert require_valid(default_params).valid


class TestErrors:
    """Parameters that cannot produce a well-indexed mesh."""

    @pytest.mark.parametrize("overrides,code", [
        ({"steps_per_turn": 2}, "STEPS_TOO_FEW"),
        ({"turns": 0}, "TURNS_TOO_FEW"),
        ({"inner_radius": 0.0}, "INNER_RADIUS_NOT_POSITIVE"),
        ({"outer_radius": -0.5}, "OUTER_RADIUS_NOT_POSITIVE"),
        ({"height_per_turn": 0.0}, "HEIGHT_NOT_POSITIVE"),
        ({"lead_length": -0.1}, "LEAD_LENGTH_NEGATIVE"),
    ])
    def test_error_codes(self, make_params, overrides, code):
        result = validate_params(make_params(**overrides))
        assert not result.valid
        assert code in [m.code for m in result.errors]

    def test_minimum_steps_accepted(self, make_params):
        """Three steps is the smallest ring; it only warns about the host range."""
        result = validate_params(make_params(steps_per_turn=3))
        assert result.valid
        assert _codes(result) == ["OUT_OF_HOST_RANGE"]

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_short_circuits(self, make_params, value):
        """A non-finite value is reported alone; other checks are skipped."""
        result = validate_params(make_params(height_per_turn=value))
        assert not result.valid
        assert _codes(result) == ["NOT_FINITE"]

    @pytest.mark.parametrize("data", [
        {"inner_radius": "1.0"},
        {"height_per_turn": None},
        {"turns": "six"},
        {"steps_per_turn": True},
    ])
    def test_non_numeric_dict_value(self, data):
        """Wrong types are reported, not raised."""
        result = validate_params(data)
        assert not result.valid
        assert _codes(result) == ["NOT_A_NUMBER"]

    def test_multiple_errors_collected(self, make_params):
        result = validate_params(make_params(steps_per_turn=1, turns=0))
        assert {"STEPS_TOO_FEW", "TURNS_TOO_FEW"} <= set(_codes(result))


class TestWarnings:
    """Geometry-only findings keep the parameters valid."""

    def test_thread_inside_core(self, make_params):
        result = validate_params(make_params(inner_radius=1.2, outer_radius=1.0))
        assert result.valid
        assert [m.code for m in result.warnings] == ["THREAD_INSIDE_CORE"]

    def test_flat_thread(self, make_params):
        result = validate_params(make_params(inner_radius=1.0, outer_radius=1.0))
        assert [m.code for m in result.warnings] == ["THREAD_DEPTH_ZERO"]

    def test_zero_lead_with_leads(self, make_params):
        result = validate_params(make_params(lead_length=0.0))
        assert result.valid
        assert "LEAD_LENGTH_ZERO" in [m.code for m in result.warnings]

    def test_zero_lead_without_leads_not_warned(self, make_params):
        result = validate_params(make_params(lead_length=0.0, lead_in=False, lead_out=False))
        assert "LEAD_LENGTH_ZERO" not in _codes(result)

    def test_out_of_host_range(self, make_params):
        result = validate_params(make_params(turns=2000))
        assert result.valid
        warning = result.warnings[0]
        assert warning.code == "OUT_OF_HOST_RANGE"
        assert "Turns" in warning.message

    @pytest.mark.parametrize("lead_in,lead_out", [(False, True), (True, False), (False, False)])
    def test_disabled_lead_is_info(self, make_params, lead_in, lead_out):
        result = validate_params(make_params(lead_in=lead_in, lead_out=lead_out))
        assert result.valid
        assert [m.code for m in result.infos] == ["MESH_OPEN"]


class TestInvalidParameterError:
    def test_raised_with_result(self, make_params):
        with pytest.raises(InvalidParameterError) as exc_info:
            require_valid(make_params(turns=0))

        assert isinstance(exc_info.value, ValueError)
        assert not exc_info.value.result.valid
        assert "TURNS_TOO_FEW" in str(exc_info.value)

    def test_message_lists_only_errors(self):
        result = ValidationResult(valid=False, messages=[
            ValidationMessage(Severity.ERROR, "A_CODE", "first"),
            ValidationMessage(Severity.WARNING, "W_CODE", "ignored"),
        ])
        message = str(InvalidParameterError(result))
        assert "A_CODE: first" in message
        assert "W_CODE" not in message
