# Run:
#   pip install -e .
#   python -m fallingsand
#
# Notes:
# - Y increases DOWN (top row is y=0). The bottom row is a permanent floor.
# - Controls: LMB=Sand, RMB=Block, MMB=Eraser, Tab=next color, P=toggle pulsing
#   sand color, C=clear, [ / ] brush size, Esc=quit

import argparse
import logging
import sys

import pygame

from fallingsand import settings
from fallingsand.cells import CellKind
from fallingsand.toolbox import ToolBox, display_color, pointer_to_cell
from fallingsand.world import World

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Falling sand sandbox")
    parser.add_argument("--width", type=int, default=settings.WINDOW_W, help="window width in pixels")
    parser.add_argument("--height", type=int, default=settings.WINDOW_H, help="window height in pixels")
    parser.add_argument("--cell-size", type=int, default=settings.CELL_SIZE, help="pixels per cell")
    parser.add_argument("--fps", type=int, default=settings.FPS)
    parser.add_argument("--radius", type=int, default=settings.SAND_RADIUS, help="sand brush radius in cells")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--shuffle-columns", action="store_true",
                        help="randomize column scan order as well as rows")
    parser.add_argument("--no-hud", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


class Sandbox:
    """Owns the World and the grid-sized surface that mirrors it."""

    def __init__(self, size, cell_size, seed=None, shuffle_columns=False):
        self.cell_size = cell_size
        self.seed = seed
        self.shuffle_columns = shuffle_columns
        self.resize(size)

    def resize(self, size):
        self.size = size
        grid_w = max(1, size[0] // self.cell_size)
        grid_h = max(1, size[1] // self.cell_size)
        self.world = World(grid_w, grid_h, seed=self.seed, shuffle_columns=self.shuffle_columns)
        self.surface = pygame.Surface((grid_w, grid_h))
        self.surface.fill(settings.BACKGROUND)

    def clear(self):
        self.resize(self.size)

    def to_cell(self, pos):
        return pointer_to_cell(pos[0], pos[1], self.size[0], self.size[1],
                               self.world.width, self.world.height)

    def repaint(self, points):
        for p in points:
            self.surface.set_at((p.x, p.y), display_color(self.world.get(p.x, p.y)))

    def repaint_area(self, cx, cy, radius):
        for y in range(max(0, cy - radius - 1), min(self.world.height, cy + radius + 2)):
            for x in range(max(0, cx - radius - 1), min(self.world.width, cx + radius + 2)):
                self.surface.set_at((x, y), display_color(self.world.get(x, y)))


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    size = (args.width, args.height)
    screen = pygame.display.set_mode(size, pygame.RESIZABLE)
    pygame.display.set_caption("Falling Sand")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas", 16)

    sandbox = Sandbox(size, args.cell_size, seed=args.seed, shuffle_columns=args.shuffle_columns)
    tools = ToolBox(radius=args.radius)
    tick = 0

    running = True
    while running:
        # --- input ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                size = (event.w, event.h)
                screen = pygame.display.set_mode(size, pygame.RESIZABLE)
                sandbox.resize(size)
            elif event.type == pygame.KEYDOWN:
                k = event.key
                if k == pygame.K_ESCAPE:
                    running = False
                elif k == pygame.K_c:
                    sandbox.clear()
                elif k == pygame.K_TAB:
                    tools.next_color()
                elif k == pygame.K_p:
                    tools.pulse = not tools.pulse
                elif k == pygame.K_LEFTBRACKET:
                    tools.resize_brush(-1)
                elif k == pygame.K_RIGHTBRACKET:
                    tools.resize_brush(1)

        # Paint with mouse
        gx, gy = sandbox.to_cell(pygame.mouse.get_pos())
        buttons = pygame.mouse.get_pressed(3)
        world = sandbox.world
        if buttons[0]:  # LMB - sand
            tick += 1
            world.add_sand(gx, gy, tools.sand_color(tick), tools.radius)
        elif buttons[2]:  # RMB - block
            world.add_block(gx, gy, tools.current_color, tools.radius // 2)
        elif buttons[1]:  # MMB - erase
            world.erase(gx, gy, tools.radius // 2)

        # --- simulation ---
        if buttons[0] or buttons[1] or buttons[2]:
            # painted cells are not part of the changed list
            sandbox.repaint_area(gx, gy, tools.radius)
        sandbox.repaint(world.process_frame())

        # --- draw ---
        screen.blit(pygame.transform.scale(sandbox.surface, size), (0, 0))

        if not args.no_hud:
            hud_lines = [
                f"Color: {tools.current_color}  pulse={'on' if tools.pulse else 'off'}  (Tab / P)",
                f"Brush: {tools.radius}  ([ / ])    Grid: {world.width}x{world.height}"
                f"   Sand: {world.count(CellKind.SAND)}",
                "LMB sand  RMB block  MMB erase  C clear  Esc quit",
            ]
            y = 6
            for line in hud_lines:
                text = font.render(line, True, (90, 90, 90))
                screen.blit(text, (6, y))
                y += 18

        pygame.display.flip()
        clock.tick(args.fps)

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
