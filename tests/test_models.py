import pytest

from job_hunter.models import FormField, PageAnalysis, UserProfile, direct_value


def test_form_field_from_model_json():
    f = FormField.from_dict({
        "selector": "#phone", "type": "tel", "label": "Phone",
        "required": True, "profileMapping": "phone",
    })
    assert f.type == "phone"
    assert f.required is True
    assert f.profile_mapping == "phone"
    assert f.options == []


def test_unknown_field_type_falls_back_to_text():
    assert FormField.from_dict({"selector": "#x", "type": "date"}).type == "text"


def test_page_analysis_normalizes_unknown_page_type():
    analysis = PageAnalysis.from_dict({"pageType": "careers_home", "errors": "Session expired"})
    assert analysis.page_type == "other"
    assert analysis.errors == ["Session expired"]


def test_page_analysis_drops_fields_without_selector():
    analysis = PageAnalysis.from_dict({
        "pageType": "application_form",
        "formFields": [{"label": "Name"}, {"selector": "#name", "label": "Name"}, "junk"],
        "jobs": [{"title": "SRE", "selector": "a.job", "url": "https://x/1"}],
    })
    assert [f.selector for f in analysis.form_fields] == ["#name"]
    assert analysis.jobs[0].url == "https://x/1"
    assert analysis.to_dict()["form_fields"][0]["selector"] == "#name"


def test_user_profile_from_nested_yaml_layout():
    profile = UserProfile.from_dict({
        "profile": {"skills": ["Python", "SQL", "Python"]},
        "experience": [{"title": "SRE", "company": "Acme"}],
        "education": [{"degree": "MSc", "field": "Physics"}],
    })
    assert profile.skills == ["Python", "SQL"]
    assert profile.experience[0].description is None
    assert profile.education[0].field == "Physics"


def test_user_profile_from_empty_mapping():
    profile = UserProfile.from_dict({})
    assert profile.skills == [] and profile.experience == [] and profile.education == []


@pytest.mark.parametrize("raw, expected", [
    (True, True), (False, False), ("false", False), ("False", False), ("no", False),
    ("true", True), ("Yes", True), (1, True), (0, False), (None, False), ([], False),
])
def test_required_flag_parsing(raw, expected):
    assert FormField.from_dict({"selector": "#a", "required": raw}).required is expected


def test_login_required_string_false():
    assert PageAnalysis.from_dict({"pageType": "login", "loginRequired": "false"}).login_required is False


def test_non_string_mapping_and_value_are_coerced():
    f = FormField.from_dict({"selector": "#a", "profileMapping": ["email"], "value": 7})
    assert f.profile_mapping is None
    assert f.value == "7"
    assert FormField.from_dict({"selector": "#a", "value": {"x": 1}}).value is None


def test_list_members_must_be_lists():
    with pytest.raises(TypeError):
        PageAnalysis.from_dict({"jobs": 5})
    with pytest.raises(TypeError):
        PageAnalysis.from_dict({"formFields": "#a"})


def test_direct_value_reads_contact_and_top_level():
    profile = {"firstName": "Jane", "contact": {"location": "Berlin"}}
    assert direct_value(FormField("#c", "text", "City", profile_mapping="city"), profile) == "Berlin"
    assert direct_value(FormField("#f", "text", "First", profile_mapping="firstName"), profile) == "Jane"
    assert direct_value(FormField("#p", "phone", "Phone", profile_mapping="phone"), profile) == ""
    assert direct_value(FormField("#n", "text", "Note"), profile) == ""
