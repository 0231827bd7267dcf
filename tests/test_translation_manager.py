"""Tests for the per-language translation fan-out."""

from arb_extractor.config import END_OF_FILE_MARKER_KEY
from arb_extractor.prompts import ScriptedPrompter
from arb_extractor.translation.manager import TranslationManager


class TestTranslateKey:
    """Fan-out into every target language file."""

    def test_translates_into_every_target(self, config, arb_folder, write_arb, read_arb, fake_ai):
        write_arb(arb_folder / "intl_en.arb", {"hello": "Hello {name}"})
        write_arb(arb_folder / "intl_es.arb", {"bye": "Adiós", END_OF_FILE_MARKER_KEY: "marker"})
        write_arb(arb_folder / "intl_fr.arb", {})

        result = TranslationManager(config, ai_service=fake_ai).translate_key("hello", "Hello {name}")

        assert result.languages == ["es", "fr"]
        assert result.success_count == 2
        spanish = read_arb(arb_folder / "intl_es.arb")
        assert list(spanish.keys()) == ["bye", "hello", "@hello", END_OF_FILE_MARKER_KEY]
        assert spanish["hello"] == "[es] Hello {name}"
        assert spanish["@hello"] == {"placeholders": {"name": {"type": "String"}}}
        assert read_arb(arb_folder / "intl_fr.arb")["hello"] == "[fr] Hello {name}"
        assert [call[2] for call in fake_ai.calls] == ["es", "fr"]
        assert all(call[1] == "en" for call in fake_ai.calls)

    def test_failure_in_one_language_does_not_stop_the_others(
        self, config, arb_folder, write_arb, read_arb, fake_ai_factory
    ):
        write_arb(arb_folder / "intl_en.arb", {"hello": "Hello"})
        write_arb(arb_folder / "intl_de.arb", {END_OF_FILE_MARKER_KEY: "marker"})
        write_arb(arb_folder / "intl_es.arb", {})
        ai = fake_ai_factory(failing_languages={"de"})

        result = TranslationManager(config, ai_service=ai).translate_key("hello", "Hello")

        assert result.success_count == 1
        assert result.failure_count == 1
        german = result.outcomes[0]
        assert german.language_code == "de"
        assert german.error.startswith('Failed translating "hello" to de:')
        assert read_arb(arb_folder / "intl_de.arb") == {END_OF_FILE_MARKER_KEY: "marker"}
        assert read_arb(arb_folder / "intl_es.arb") == {"hello": "[es] Hello"}

    def test_unparseable_target_is_a_per_language_failure(self, config, arb_folder, write_arb, read_arb, fake_ai):
        (arb_folder / "intl_de.arb").write_text("{ broken", encoding="utf-8")
        write_arb(arb_folder / "intl_es.arb", {})

        result = TranslationManager(config, ai_service=fake_ai).translate_key("hello", "Hello")

        assert [o.success for o in result.outcomes] == [False, True]
        assert (arb_folder / "intl_de.arb").read_text(encoding="utf-8") == "{ broken"

    def test_unparseable_target_is_reset_when_allowed(self, config, arb_folder, read_arb, fake_ai):
        (arb_folder / "intl_de.arb").write_text("{ broken", encoding="utf-8")
        prompter = ScriptedPrompter({"reset_invalid_files": True})

        result = TranslationManager(config, ai_service=fake_ai, prompter=prompter).translate_key("hello", "Hello")

        assert result.success_count == 1
        assert read_arb(arb_folder / "intl_de.arb") == {"hello": "[de] Hello"}

    def test_no_targets(self, config, arb_folder, write_arb, fake_ai):
        write_arb(arb_folder / "intl_en.arb", {"hello": "Hello"})

        result = TranslationManager(config, ai_service=fake_ai).translate_key("hello", "Hello")

        assert result.outcomes == []
        assert fake_ai.calls == []

    def test_first_target_language_added_on_request(self, config, arb_folder, read_arb, fake_ai):
        prompter = ScriptedPrompter({"new_language": "it"})

        result = TranslationManager(config, ai_service=fake_ai, prompter=prompter).translate_key("hello", "Hello")

        assert result.languages == ["it"]
        assert read_arb(arb_folder / "intl_it.arb") == {"hello": "[it] Hello"}

    def test_explicit_targets_skip_discovery(self, config, arb_folder, read_arb, fake_ai):
        result = TranslationManager(config, ai_service=fake_ai).translate_key(
            "hello", "Hello", target_languages=["ja"]
        )

        assert result.languages == ["ja"]
        assert read_arb(arb_folder / "intl_ja.arb") == {"hello": "[ja] Hello"}


class TestProgressReporting:
    def test_phases_in_order(self, config, arb_folder, write_arb, fake_ai):
        write_arb(arb_folder / "intl_es.arb", {})
        write_arb(arb_folder / "intl_fr.arb", {})
        updates = []

        TranslationManager(config, ai_service=fake_ai).translate_key("hello", "Hello", progress_callback=updates.append)

        assert [u.phase for u in updates] == [
            "translating", "language_done", "translating", "language_done", "completed",
        ]
        assert updates[0].current_language_name == "Spanish"
        assert updates[-1].completed_languages == 2
        assert updates[-1].success_count == 2
        assert "Finished" in updates[-1].message

    def test_failing_callback_does_not_stop_translation(self, config, arb_folder, write_arb, fake_ai):
        write_arb(arb_folder / "intl_es.arb", {})

        def broken(progress):
            raise RuntimeError("observer crashed")

        result = TranslationManager(config, ai_service=fake_ai).translate_key("hello", "Hello", progress_callback=broken)

        assert result.success_count == 1
