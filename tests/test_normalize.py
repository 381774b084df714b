"""
Tests for the filter request normalizer.
"""

from jobboard.normalize import as_list, normalize_filter_request, normalize_work_mode


class TestNormalizeFilterRequest:

    def test_scalars_become_single_item_lists(self):
        data = normalize_filter_request(
            {"workmode": "remote", "EmpType": "full_time", "salaryrange": "3-6L", "city": "Pune"}
        )
        assert data["workmode"] == ["remote"]
        assert data["EmpType"] == ["full_time"]
        assert data["salaryrange"] == ["3-6L"]
        assert data["city"] == ["Pune"]

    def test_missing_fields_become_empty_lists(self):
        data = normalize_filter_request({})
        assert data == {"workmode": [], "EmpType": [], "salaryrange": [], "city": []}

    def test_none_request(self):
        assert normalize_filter_request(None)["city"] == []

    def test_lists_are_kept(self):
        data = normalize_filter_request({"city": ["Pune", "Delhi"], "workmode": ("remote", "hybrid")})
        assert data["city"] == ["Pune", "Delhi"]
        assert data["workmode"] == ["remote", "hybrid"]

    def test_other_fields_untouched(self):
        data = normalize_filter_request({"page": "2", "sortby": "maxsalary_desc", "search": "python"})
        assert data["page"] == "2"
        assert data["sortby"] == "maxsalary_desc"
        assert data["search"] == "python"

    def test_input_not_mutated(self):
        raw = {"city": "Pune"}
        normalize_filter_request(raw)
        assert raw == {"city": "Pune"}

    def test_snake_case_spellings_map_to_wire_names(self):
        data = normalize_filter_request({"work_mode": "remote", "emp_type": "contract"})
        assert data["workmode"] == ["remote"]
        assert data["EmpType"] == ["contract"]
        assert "work_mode" not in data
        assert "emp_type" not in data

    def test_experience_only_coerced_when_present(self):
        assert "experience" not in normalize_filter_request({})
        assert normalize_filter_request({"experience": "1-3"})["experience"] == ["1-3"]

    def test_blank_scalars_mean_no_constraint(self):
        data = normalize_filter_request({"workmode": "", "city": "  ", "experience": ""})
        assert data["workmode"] == []
        assert data["city"] == []
        assert data["experience"] == []


def test_as_list():
    assert as_list(None) == []
    assert as_list("x") == ["x"]
    assert as_list(["x", "y"]) == ["x", "y"]
    assert as_list("") == []


def test_work_mode_synonyms():
    assert normalize_work_mode("On-Site") == "onsite"
    assert normalize_work_mode("  Fully   Remote ") == "remote"
    assert normalize_work_mode("Flexible") == "hybrid"
    assert normalize_work_mode("somewhere") == "somewhere"
