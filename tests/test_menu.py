import logging

import pygame
import pytest

from space_defender.config import FPS, HIGHSCORE_ENV, HIGHSCORE_PATH, GameSettings
from space_defender.game import GameState, UnknownSceneError, parse_args
from space_defender.log import setup_logger
from space_defender.menu import MenuScene


def click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_game_opens_on_the_menu(game):
    assert isinstance(game.scene, MenuScene)
    assert game.state is GameState.MENU


def test_start_game(game):
    game.scene.handle_event(click((400, 300)))
    assert game.state is GameState.PLAYING
    assert game.scene.session.score == 0


def test_instructions_panel_opens_and_closes(game):
    menu = game.scene
    menu.handle_event(click((400, 400)))
    assert menu.show_instructions

    # clicks while the panel is up never reach the buttons
    menu.handle_event(click((400, 300)))
    assert not menu.show_instructions
    assert game.state is GameState.MENU


def test_quit_stops_the_loop(game):
    game.running = True
    game.scene.handle_event(click((400, 500)))
    assert not game.running


def test_escape_quits_from_the_menu(game):
    game.running = True
    game.scene.handle_event(key(pygame.K_ESCAPE))
    assert not game.running


def test_keyboard_navigation(game):
    game.running = True
    menu = game.scene
    menu.handle_event(key(pygame.K_DOWN))
    menu.handle_event(key(pygame.K_RETURN))
    assert menu.show_instructions
    menu.handle_event(key(pygame.K_ESCAPE))
    assert not menu.show_instructions

    menu.handle_event(key(pygame.K_UP))
    menu.handle_event(key(pygame.K_UP))
    menu.handle_event(key(pygame.K_RETURN))
    assert game.running is False
    assert game.state is GameState.MENU


def test_hover_selects_item(game):
    menu = game.scene
    menu.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(400, 500), rel=(0, 0), buttons=(0, 0, 0)))
    assert menu.menu.items[menu.menu.selected].label == "Quit"


def test_menu_stars_drift(game):
    menu = game.scene
    before = [s.y for s in menu.stars.stars]
    menu.update(0.5, None)
    assert [s.y for s in menu.stars.stars] != before


def test_unknown_scene(game):
    with pytest.raises(UnknownSceneError):
        game.start_scene("credits")
    with pytest.raises(KeyError):
        game.start_scene("credits")
    assert isinstance(game.scene, MenuScene)


def test_default_arguments(monkeypatch):
    monkeypatch.delenv(HIGHSCORE_ENV, raising=False)
    settings = GameSettings.from_args(parse_args([]))
    assert settings.highscore_path == HIGHSCORE_PATH
    assert settings.fps == FPS
    assert not settings.mute and not settings.show_hitboxes
    assert settings.log_level == "INFO"


def test_highscore_path_precedence(monkeypatch, tmp_path):
    from_env = str(tmp_path / "env.json")
    monkeypatch.setenv(HIGHSCORE_ENV, from_env)
    assert GameSettings.from_args(parse_args([])).highscore_path == from_env

    from_flag = str(tmp_path / "flag.json")
    args = parse_args(["--highscore-file", from_flag, "--mute", "--log-level", "DEBUG"])
    settings = GameSettings.from_args(args)
    assert settings.highscore_path == from_flag
    assert settings.mute
    assert settings.log_level == "DEBUG"


def test_setup_logger_is_idempotent():
    root = logging.getLogger("space_defender")
    handlers, propagate, level = list(root.handlers), root.propagate, root.level
    try:
        setup_logger("debug")
        setup_logger(logging.WARNING)
        assert len(root.handlers) == max(1, len(handlers))
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = handlers
        root.propagate = propagate
        root.setLevel(level)
