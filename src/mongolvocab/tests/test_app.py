"""Tests for the application facade and command line."""
import argparse

import pytest

from mongolvocab.__main__ import build_parser, run
from mongolvocab.app import VocabApp
from mongolvocab.config import Settings
from mongolvocab.models.vocab_models import AcceptedPack, PracticeMode


@pytest.fixture
def app(storage, clock, learning):
    settings = Settings()
    settings.learning = learning
    app = VocabApp(settings, storage=storage, clock=clock)
    yield app
    app.close()


def test_app_wires_services_to_one_storage(app, storage):
    assert app.dictionary.storage is storage
    assert app.progress.streak is app.streak
    assert len(app.progress.daily_words) == 5


def test_full_day_of_practice(app):
    for mode in PracticeMode:
        for word in app.progress.get_words_for_mode(mode):
            app.progress.mark_card_completed(mode, word.id)
        result = app.progress.mark_mode_completed(mode)

    assert result.new_streak == 1
    assert app.progress.is_both_modes_completed()

    app.reset_today_progress()

    assert app.streak.get_streak_data().current_streak == 0
    assert not app.progress.is_mode_completed(PracticeMode.ENGLISH_TO_MONGOLIAN)


def test_app_as_context_manager(kv_storage, clock):
    with VocabApp(Settings(), storage=kv_storage, clock=clock) as app:
        assert app.storage is kv_storage


def parse(*argv) -> argparse.Namespace:
    return build_parser().parse_args(list(argv))


def test_cli_status(app, capsys):
    assert run(parse("status"), app) == 0

    out = capsys.readouterr().out
    assert f"Storage:         {app.storage.name}" in out
    assert "Words:           150" in out
    assert "Pending packs:   2" in out


def test_cli_accept_and_upgrade(app, capsys):
    app.packs.accept_pack("animals", 1)

    assert run(parse("upgrade", "animals", "--mode", "reset"), app) == 0
    assert app.packs.is_pack_accepted("animals") == AcceptedPack("animals", 2)

    assert run(parse("accept", "missionary_starter"), app) == 0
    run(parse("packs"), app)

    out = capsys.readouterr().out
    assert "Kept as custom: 0" in out
    assert "missionary_starter" in out
    assert app.packs.get_pending_pack_count() == 0


def test_cli_rejects_unknown_or_unaccepted_pack(app, capsys):
    assert run(parse("dismiss", "nope"), app) == 1
    assert run(parse("upgrade", "animals"), app) == 1
    assert "not accepted" in capsys.readouterr().err
