"""Tests for command-line parsing and the stylesheet (no Qt needed)."""

import os

from timeline_plotter.__main__ import _parse_args
from timeline_plotter.constants import DATE_TICK_FORMAT
from timeline_plotter.theme import LOADING_LABEL, get_dark_stylesheet


def test_defaults_without_data_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    args = _parse_args([])
    assert args.locator == ""
    assert args.date_format == DATE_TICK_FORMAT
    assert not args.no_sort
    assert not args.dynamic_typing


def test_falls_back_to_local_data_file(tmp_path, monkeypatch):
    (tmp_path / "data.csv").write_text("date,value\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    args = _parse_args([])
    assert args.locator == os.path.abspath("data.csv")


def test_explicit_locator_and_options():
    args = _parse_args([
        "https://example.com/data.csv", "--date-format", "%d %b",
        "--no-sort", "--dynamic-typing",
    ])
    assert args.locator == "https://example.com/data.csv"
    assert args.date_format == "%d %b"
    assert args.no_sort
    assert args.dynamic_typing


def test_stylesheet_styles_named_widgets():
    sheet = get_dark_stylesheet()
    assert f"QLabel#{LOADING_LABEL} {{" in sheet
    assert sheet.count("{") == sheet.count("}")


def test_stylesheet_accepts_custom_palette():
    palette = {key: "#000000" for key in (
        "bg", "bg_alt", "bg_widget", "bg_input", "fg", "fg_dim",
        "accent", "border", "selection",
    )}
    sheet = get_dark_stylesheet(palette)
    assert "#1e1e2e" not in sheet
