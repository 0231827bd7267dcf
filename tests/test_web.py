"""Tests for the Flask HTTP surface."""

import time

import pytest

from arb_extractor.web import create_app
from arb_extractor.web.context import AI_SERVICE_KEY


def wait_for_job(client, job_id, timeout=5.0):
    deadline = time.time() + timeout
    while True:
        payload = client.get(f"/api/jobs/{job_id}").get_json()
        if payload["finished"] or time.time() > deadline:
            return payload
        time.sleep(0.05)


@pytest.fixture
def make_app(workspace, fake_ai):
    def _make(**overrides):
        settings = {
            "workspace_root": str(workspace),
            "arb_folder_path": "lib/l10n",
            "auto_translate": False,
            "gemini": {"api_key": "test-key"},
        }
        settings.update(overrides)
        app = create_app(settings)
        app.config.update(TESTING=True)
        app.config[AI_SERVICE_KEY] = fake_ai
        return app

    return _make


@pytest.fixture
def client(make_app):
    return make_app().test_client()


class TestHealthAndPlaceholders:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}

    def test_placeholders(self, client):
        response = client.post("/api/placeholders", json={"text": "'Order ${data.order.code}'"})

        assert response.status_code == 200
        payload = response.get_json()
        assert payload["arb_text"] == "Order {code}"
        assert payload["original_placeholders"] == ["data.order.code"]
        assert payload["suggested_key"] == "order"

    def test_placeholders_requires_text(self, client):
        response = client.post("/api/placeholders", json={})

        assert response.status_code == 400

    def test_unknown_route_is_json(self, client):
        response = client.get("/api/nothing")

        assert response.status_code == 404
        assert response.get_json()["code"] == "not_found"


class TestLanguages:
    def test_lists_target_languages(self, client, arb_folder, write_arb):
        for name in ("intl_en.arb", "intl_es.arb", "intl_fr-CA.arb"):
            write_arb(arb_folder / name, {})

        payload = client.get("/api/languages").get_json()

        assert [lang["code"] for lang in payload["languages"]] == ["es", "fr-CA"]
        assert payload["languages"][1]["name"] == "French (Canada)"
        assert payload["source_language"]["file"] == "intl_en.arb"


class TestExtract:
    def test_extracts_string(self, client, arb_folder, read_arb):
        response = client.post("/api/extract", json={"text": "'Hello'"})

        assert response.status_code == 200
        payload = response.get_json()
        assert payload["status"] == "extracted"
        assert payload["replacement"] == "S.current.hello"
        assert payload["job_id"] is None
        assert read_arb(arb_folder / "intl_en.arb") == {"hello": "Hello"}

    def test_missing_decision_returns_question(self, client, arb_folder, write_arb, read_arb):
        write_arb(arb_folder / "intl_en.arb", {"greeting": "Hello {name}"})

        response = client.post("/api/extract", json={"text": "Hello $name", "key": "greeting"})

        assert response.status_code == 409
        payload = response.get_json()
        assert payload["decision"] == "key_conflict"
        assert payload["question"]["existing_key"] == "greeting"
        assert read_arb(arb_folder / "intl_en.arb") == {"greeting": "Hello {name}"}

        response = client.post("/api/extract", json={
            "text": "Hello $name",
            "key": "greeting",
            "decisions": {"key_conflict": "reuse"},
        })

        assert response.status_code == 200
        assert response.get_json()["replacement"] == "S.current.greeting(name)"

    def test_source_editing(self, make_app):
        client = make_app(import_statement="import 'package:app/l10n.dart';").test_client()
        source = "void main() => print('Bye');\n"
        start = source.index("'Bye'")

        response = client.post("/api/extract", json={
            "text": "'Bye'",
            "source": source,
            "selection_start": start,
            "selection_end": start + len("'Bye'"),
        })

        assert response.get_json()["updated_source"] == (
            "import 'package:app/l10n.dart';\nvoid main() => print(S.current.bye);\n"
        )

    def test_empty_text_is_rejected(self, client):
        response = client.post("/api/extract", json={"text": "  "})

        assert response.status_code == 400
        assert response.get_json()["code"] == "invalid_input"

    def test_invalid_configuration(self, make_app):
        client = make_app(file_name_pattern="strings.arb").test_client()

        response = client.post("/api/extract", json={"text": "Hello"})

        assert response.status_code == 400
        assert response.get_json()["code"] == "config_error"

    def test_workspace_root_outside_configured_root_is_rejected(self, client, workspace):
        outside = workspace.parent / "elsewhere"

        for root in (str(outside), "../elsewhere"):
            response = client.post("/api/extract", json={"text": "Hello", "workspace_root": root})

            assert response.status_code == 400
            assert response.get_json()["code"] == "config_error"
        assert not outside.exists()

        response = client.get("/api/languages", query_string={"workspace_root": "../elsewhere"})
        assert response.status_code == 400

    def test_workspace_root_inside_configured_root(self, client, workspace, read_arb):
        (workspace / "packages" / "app").mkdir(parents=True)

        response = client.post("/api/extract", json={"text": "Hello", "workspace_root": "packages/app"})

        assert response.status_code == 200
        assert read_arb(workspace / "packages" / "app" / "lib" / "l10n" / "intl_en.arb")["hello"] == "Hello"

    def test_write_failure(self, make_app, workspace):
        (workspace / "blocked").write_text("", encoding="utf-8")
        client = make_app(arb_folder_path="blocked/l10n").test_client()

        response = client.post("/api/extract", json={"text": "Hello"})

        assert response.status_code == 500
        assert response.get_json()["status"] == "failed"


class TestJobs:
    def test_translation_runs_as_job(self, client, arb_folder, write_arb, read_arb):
        write_arb(arb_folder / "intl_es.arb", {})

        response = client.post("/api/extract", json={"text": "'Hello'", "translate": True})
        job_id = response.get_json()["job_id"]
        assert job_id

        job = wait_for_job(client, job_id)

        assert job["state"] == "completed"
        assert job["result"]["translation"]["success_count"] == 1
        assert [p["phase"] for p in job["progress_history"]][-1] == "completed"
        assert read_arb(arb_folder / "intl_es.arb") == {"hello": "[es] Hello"}

    def test_unknown_job(self, client):
        response = client.get("/api/jobs/does-not-exist")

        assert response.status_code == 404
