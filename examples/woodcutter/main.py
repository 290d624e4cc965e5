"""Woodcutter - vitae progression demo with pygame.

Click a task to start it (click the running task to stop it), click an
upgrade to buy it. SPACE pauses/resumes, ESC quits. Progress is saved to
``--save`` after every change and reloaded on the next run.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable

import pygame

from vitae_game import Game, Resource

from game.setup import TPS, GameState

SCREEN_W, SCREEN_H = 960, 600
FPS = 60
TITLE = "Woodcutter - vitae"
BG_COLOR = (22, 24, 30)
TEXT_COLOR = (220, 220, 230)
DIM_COLOR = (130, 130, 145)
BAR_BG = (55, 58, 68)
BAR_COLORS = {"hp": (200, 60, 60), "stamina": (70, 190, 90)}
BAR_DEFAULT = (190, 150, 70)
BUTTON_COLOR = (48, 60, 82)
BUTTON_ACTIVE = (60, 110, 70)
BUTTON_DISABLED = (40, 40, 46)
BUTTON_W, BUTTON_H = 260, 30
LOG_LINES = 9

Action = Callable[[], bool]


def _draw_bar(
    screen: pygame.Surface, font: pygame.font.Font, x: int, y: int,
    resource: Resource,
) -> None:
    label = f"{resource.name.capitalize()}: {resource.value:.1f}"
    if resource.max > 0:
        label += f" / {resource.max:g}"
    if resource.rate:
        label += f"  ({resource.rate:+g}/s)"
    screen.blit(font.render(label, True, TEXT_COLOR), (x, y))
    if resource.max > 0:
        frac = min(resource.value / resource.max, 1.0)
        pygame.draw.rect(screen, BAR_BG, (x, y + 20, 220, 6))
        color = BAR_COLORS.get(resource.id, BAR_DEFAULT)
        pygame.draw.rect(screen, color, (x, y + 20, int(220 * frac), 6))


def _draw_resources(screen: pygame.Surface, font: pygame.font.Font, game: Game) -> None:
    y = 20
    screen.blit(font.render("Resources", True, DIM_COLOR), (20, y))
    y += 26
    for resource in game.unlocked_resources():
        _draw_bar(screen, font, 20, y, resource)
        y += 36
    y += 10
    screen.blit(font.render("Stats", True, DIM_COLOR), (20, y))
    y += 26
    for resource in game.stat_resources():
        _draw_bar(screen, font, 20, y, resource)
        y += 36


def _button(
    screen: pygame.Surface, font: pygame.font.Font, x: int, y: int,
    label: str, color: tuple[int, int, int],
) -> pygame.Rect:
    rect = pygame.Rect(x, y, BUTTON_W, BUTTON_H)
    pygame.draw.rect(screen, color, rect, border_radius=4)
    screen.blit(font.render(label, True, TEXT_COLOR), (x + 8, y + 7))
    return rect


def _draw_tasks(
    screen: pygame.Surface, font: pygame.font.Font, game: Game,
) -> list[tuple[pygame.Rect, Action]]:
    buttons: list[tuple[pygame.Rect, Action]] = []
    tasks = game.player.tasks
    current = tasks.current_id()
    x, y = 300, 20
    for group, defs in game.tasks_by_group().items():
        screen.blit(font.render(group.capitalize(), True, DIM_COLOR), (x, y))
        y += 24
        for task in defs:
            state = tasks.state(task.id)
            params = tasks.task_params(task.id)
            label = params.name.capitalize() if params else task.name
            if state is not None and state.completions:
                label += f"  x{state.completions}"
            if task.id == current:
                color = BUTTON_ACTIVE
                action: Action = game.stop_task
            elif state is not None and state.interrupted:
                color = BUTTON_COLOR
                action = lambda tid=task.id: game.resume_task(tid)
                label += "  (resume)"
            else:
                color = BUTTON_COLOR if game.can_start_task(task.id) else BUTTON_DISABLED
                action = lambda tid=task.id: game.start_task(tid)
            buttons.append((_button(screen, font, x, y, label, color), action))
            y += BUTTON_H + 6
        y += 8
    return buttons


def _draw_upgrades(
    screen: pygame.Surface, font: pygame.font.Font, game: Game,
) -> list[tuple[pygame.Rect, Action]]:
    buttons: list[tuple[pygame.Rect, Action]] = []
    upgrades = game.player.upgrades
    x, y = 600, 20
    screen.blit(font.render("Upgrades", True, DIM_COLOR), (x, y))
    y += 24
    for upgrade in game.available_upgrades():
        cost = ", ".join(f"{v:g} {k}" for k, v in upgrade.cost.items())
        label = f"{upgrade.name.capitalize()} ({cost})" if cost else upgrade.name.capitalize()
        level = upgrades.level(upgrade.id)
        if level:
            label += f"  L{level}"
        color = BUTTON_COLOR if upgrades.can_purchase(upgrade.id, game.player.requirements) \
            else BUTTON_DISABLED
        action = lambda uid=upgrade.id: game.purchase_upgrade(uid)
        buttons.append((_button(screen, font, x, y, label, color), action))
        y += BUTTON_H + 6
    return buttons


def _draw_status(screen: pygame.Surface, font: pygame.font.Font, game: Game) -> None:
    y = SCREEN_H - 30 - LOG_LINES * 20 - 40
    task = game.current_task()
    if task is not None:
        params = game.player.tasks.task_params(task.id)
        label = params.label.capitalize() if params else task.name
        if game.player.tasks.is_paused():
            label += " (paused)"
        screen.blit(font.render(label, True, TEXT_COLOR), (20, y))
        pygame.draw.rect(screen, BAR_BG, (20, y + 20, SCREEN_W - 40, 8))
        width = int((SCREEN_W - 40) * game.current_progress())
        pygame.draw.rect(screen, BAR_DEFAULT, (20, y + 20, width, 8))
    else:
        screen.blit(font.render("Idle", True, DIM_COLOR), (20, y))

    y += 40
    for line in game.log.lines(LOG_LINES):
        screen.blit(font.render(line, True, DIM_COLOR), (20, y))
        y += 20


def _toggle_pause(game: Game) -> None:
    current = game.player.tasks.current_id()
    if current is None:
        return
    if game.player.tasks.is_paused():
        game.resume_task(current)
    else:
        game.pause_task()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--save", type=Path, default=Path("woodcutter_save.json"),
                        help="save file (default: %(default)s)")
    parser.add_argument("--name", default="Woodcutter", help="name for a new character")
    args = parser.parse_args()

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption(TITLE)
    font = pygame.font.SysFont(None, 22)
    clock = pygame.time.Clock()

    state = GameState(save_path=args.save, name=args.name)
    game = state.game

    # Tick accumulator for fixed-rate engine ticks
    tick_interval = 1.0 / TPS
    accumulator = 0.0
    buttons: list[tuple[pygame.Rect, Action]] = []

    running = True
    while running:
        dt = clock.tick(FPS) / 1000.0
        accumulator += dt

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    _toggle_pause(game)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                for rect, action in buttons:
                    if rect.collidepoint(event.pos):
                        action()
                        break

        while accumulator >= tick_interval:
            state.engine.step()
            accumulator -= tick_interval

        screen.fill(BG_COLOR)
        _draw_resources(screen, font, game)
        buttons = _draw_tasks(screen, font, game) + _draw_upgrades(screen, font, game)
        _draw_status(screen, font, game)
        pygame.display.flip()

    game.save()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
