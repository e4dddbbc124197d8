"""pelletgrab/play.py — Human play window.

Drives PelletGrabberEnv with KeyboardAgent so a person can play episodes
through the same reset/step contract a trainer uses. Boxes are drawn
side-on: x to the right, y up. Arrow keys move, Q quits.
"""

import pyxel

from pelletgrab.agents.keyboard import KeyboardAgent
from pelletgrab.env import PelletGrabberEnv

SCREEN_WIDTH = 256
SCREEN_HEIGHT = 96
PIXELS_PER_UNIT = 20
FLOOR_Y = 70
RESULT_FRAMES = 50

_COLOR_AGENT = 12
_COLOR_PELLET = 10
_COLOR_WALL = 8
_COLOR_FLOOR = 5
_COLOR_TEXT = 7


def world_to_screen(x: float, y: float) -> tuple[float, float]:
    return SCREEN_WIDTH / 2 + x * PIXELS_PER_UNIT, FLOOR_Y - y * PIXELS_PER_UNIT


class App:
    def __init__(self):
        pyxel.init(SCREEN_WIDTH, SCREEN_HEIGHT, title="Pellet Grabber", fps=50)
        self.env = PelletGrabberEnv()
        self.agent = KeyboardAgent()
        self.episodes = 0
        self.score = 0.0
        self.result_timer = 0
        self.last_reward = 0.0
        self._new_episode()
        pyxel.run(self.update, self.draw)

    def _new_episode(self):
        self.obs, _ = self.env.reset()
        self.agent.reset()
        self.episodes += 1

    def update(self):
        if pyxel.btnp(pyxel.KEY_Q):
            pyxel.quit()

        if self.result_timer > 0:
            self.result_timer -= 1
            if self.result_timer == 0:
                self._new_episode()
            return

        action = self.agent.act(self.obs)
        self.obs, reward, terminated, truncated, _ = self.env.step([action])
        if terminated or truncated:
            self.last_reward = reward
            self.score += reward
            self.result_timer = RESULT_FRAMES

    def draw(self):
        pyxel.cls(0)
        pyxel.line(0, FLOOR_Y, SCREEN_WIDTH, FLOOR_Y, _COLOR_FLOOR)

        layout = self.env.controller.layout
        for wall in layout.walls:
            self._draw_box(wall.position, wall.half_extent, _COLOR_WALL)
        target = self.env.controller.target
        self._draw_box(target.position, layout.pellet_half_extent, _COLOR_PELLET)
        agent = self.env.controller.agent
        self._draw_box(agent.position, layout.agent_half_extent, _COLOR_AGENT)

        pyxel.text(4, 4, f"EPISODE {self.episodes}  SCORE {self.score:+.0f}", _COLOR_TEXT)
        if self.result_timer > 0:
            msg = "PELLET!" if self.last_reward > 0 else "WALL!"
            pyxel.text(SCREEN_WIDTH // 2 - 12, 20, f"{msg} {self.last_reward:+.0f}", _COLOR_TEXT)

    def _draw_box(self, position, half_extent, color):
        x, y, _ = position
        hx, hy, _ = half_extent
        left, top = world_to_screen(x - hx, y + hy)
        pyxel.rect(left, top, 2 * hx * PIXELS_PER_UNIT, 2 * hy * PIXELS_PER_UNIT, color)


def main():
    App()


if __name__ == "__main__":
    main()
