import json

import pytest

import analyze_page


def test_demo_analysis_prints_json(monkeypatch, capsys):
    monkeypatch.setenv("APP_MODE", "demo")
    assert analyze_page.main(["https://boards.example.com/acme/1"]) == 0
    out = capsys.readouterr().out
    data = json.loads(out[out.index("{\n"):])
    assert data["page_type"] == "application_form"


def test_demo_careers_lookup(monkeypatch, capsys):
    monkeypatch.setenv("APP_MODE", "demo")
    assert analyze_page.main(["--careers", "--company", "Acme"]) == 0
    assert capsys.readouterr().out.strip().splitlines()[-1] == "https://careers.acme.example.com"


def test_production_without_key_fails_cleanly():
    assert analyze_page.main(["https://boards.example.com/acme/1"]) == 2


def test_careers_requires_company():
    with pytest.raises(SystemExit):
        analyze_page.main(["--careers"])


def test_verbose_careers_lookup_with_website(monkeypatch, capsys):
    monkeypatch.setenv("APP_MODE", "demo")
    assert analyze_page.main(["https://acme.com", "--careers", "--company", "Acme", "-v"]) == 0
    assert capsys.readouterr().out.strip().splitlines()[-1].startswith("https://careers.acme")
