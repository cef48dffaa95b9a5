# ---------- World settings ----------
ROOM_COUNT = 24            # rooms per axis, independent of the grid size
HOT_VALUE = 12             # frames a room stays awake after a write

# ---------- Particle physics ----------
GRAVITY = 0.15             # added to vertical speed every processed frame
FALL_CHANCE = 0.95         # odds of probing below before trying to slide
LANDING_DAMPING = 0.1      # vertical speed multiplier after hitting something
SLIDE_SPEED = 1.0          # vertical speed after an aggressive slide
SLIDE_MIN, SLIDE_MAX = 2, 4
SPAWN_SPEED = 2.0

# ---------- Display ----------
CELL_SIZE = 4              # pixels per cell
WINDOW_W, WINDOW_H = 800, 600
FPS = 60
SAND_RADIUS = 8
BRUSH_MIN, BRUSH_MAX = 1, 16
BACKGROUND = (255, 255, 255)
