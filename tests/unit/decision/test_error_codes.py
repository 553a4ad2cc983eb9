"""Unit tests for the error code dictionary"""
from branchpoint.decision.error_codes import ErrorCode, ErrorCodeDictionary, ErrorSeverity


def _all_errors():
    return [value for value in vars(ErrorCodeDictionary).values() if isinstance(value, ErrorCode)]


class TestErrorCodeDictionary:
    """Tests for ErrorCodeDictionary"""

    def test_attribute_name_matches_code(self):
        for name, value in vars(ErrorCodeDictionary).items():
            if isinstance(value, ErrorCode):
                assert value.code == name

    def test_codes_are_unique(self):
        codes = [error.code for error in _all_errors()]

        assert len(codes) == len(set(codes))
        assert "SYSTEM_001" in codes

    def test_group_codes(self):
        groups = {error.code for error in _all_errors() if error.code.startswith("GROUP")}

        assert groups == {"GROUP_001", "GROUP_002", "GROUP_003"}

    def test_every_error_has_remediation(self):
        for error in _all_errors():
            assert error.remediation_steps, error.code
            assert error.severity in {s.value for s in ErrorSeverity}

    def test_to_dict(self):
        payload = ErrorCodeDictionary.COMPARISON_001.to_dict()

        assert payload["code"] == "COMPARISON_001"
        assert payload["message"] == "At least 2 branches must be simulated before comparison"
        assert payload["severity"] == "error"
