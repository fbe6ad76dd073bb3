"""
Тест системных сообщений и форматирования перерыва.
"""

import pytest

from i18n import I18n


def test_both_languages_have_same_keys(i18n):
    ru = set(i18n._translations["ru"])
    en = set(i18n._translations["en"])

    assert ru == en
    assert "messages.yes" in ru


def test_format_parameters(i18n):
    assert i18n.t("messages.language_chosen", "en", language="English") == "Language: English"


def test_unknown_language_falls_back_to_default(i18n):
    assert i18n.t("messages.stopped", "xx") == i18n.t("messages.stopped", "ru")


def test_unknown_key_returns_key(i18n):
    assert i18n.t("messages.nope", "ru") == "messages.nope"


def test_missing_parameter_returns_template(i18n):
    assert i18n.t("messages.quiz_text", "ru", other="x") == i18n.t("messages.quiz_text", "ru")


def test_missing_key_in_language_falls_back(tmp_path):
    (tmp_path / "ru").mkdir()
    (tmp_path / "en").mkdir()
    (tmp_path / "ru" / "messages.yaml").write_text('hello: "Привет"\nbye: "Пока"\n', encoding="utf-8")
    (tmp_path / "en" / "messages.yaml").write_text('hello: "Hello"\n', encoding="utf-8")

    i18n = I18n(str(tmp_path))

    assert i18n.t("messages.hello", "en") == "Hello"
    assert i18n.t("messages.bye", "en") == "Пока"
    assert sorted(i18n.get_available_languages()) == ["en", "ru"]


@pytest.mark.parametrize("millis, expected", [
    (0, "0 с"),
    (5_000, "5 с"),
    (60_000, "1 мин"),
    (3_600_000, "1 ч"),
    (5_400_000, "1 ч 30 мин"),
    (90_061_000, "1 д 1 ч 1 мин"),
    (-1, "0 с"),
])
def test_format_duration_ru(i18n, millis, expected):
    assert i18n.format_duration(millis, "ru") == expected


def test_format_duration_en(i18n):
    assert i18n.format_duration(5_400_000, "en") == "1 h 30 min"
