"""
Amos BASIC - graphics.py
In-memory graphics: screens, sprites, tiles and map

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import logging

import numpy

from .base import error


# pixel size of a map tile
TILE_SIZE = 32
# map size in tiles until TILE MAP or MAP LOAD
DEFAULT_MAP_SIZE = (20, 15)
EMPTY_TILE = -1
# screen size until SCREEN
DEFAULT_SCREEN_SIZE = (640, 480)
# text placements kept until the screen is cleared
MAX_TEXTS = 256

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
# sprite pixels in this colour are not drawn
TRANSPARENT_KEY = (255, 0, 255)

COLOURS = {
    'BLACK': BLACK,
    'WHITE': WHITE,
    'RED': (255, 0, 0),
    'GREEN': (0, 128, 0),
    'LIME': (0, 255, 0),
    'BLUE': (0, 0, 255),
    'YELLOW': (255, 255, 0),
    'CYAN': (0, 255, 255),
    'MAGENTA': TRANSPARENT_KEY,
    'ORANGE': (255, 165, 0),
    'BROWN': (165, 42, 42),
    'GREY': (128, 128, 128),
    'GRAY': (128, 128, 128),
}


def parse_colour(text):
    """Convert a colour name or #RRGGBB string to an RGB tuple; None if not recognised."""
    text = text.strip().strip('"').strip()
    if text.upper() in COLOURS:
        return COLOURS[text.upper()]
    if text.startswith('#') and len(text) == 7:
        try:
            return tuple(int(text[_i:_i+2], 16) for _i in (1, 3, 5))
        except ValueError:
            return None
    return None


class Sprite(object):
    """Sprite with animation frames, position, hot spot and visibility."""

    def __init__(self, frames):
        """Create sprite from a list of RGB frames."""
        self.frames = frames
        self.frame = 0
        self.x, self.y = 0, 0
        self.handle = (0, 0)
        self.visible = False

    @property
    def image(self):
        """Current frame."""
        return self.frames[self.frame]

    @property
    def bounds(self):
        """Left, top, width and height on screen."""
        height, width = self.image.shape[:2]
        return self.x - self.handle[0], self.y - self.handle[1], width, height


class Graphics(object):
    """Graphics facade with a back buffer per screen and a displayed front buffer."""

    def __init__(self, assets=None, width=DEFAULT_SCREEN_SIZE[0], height=DEFAULT_SCREEN_SIZE[1]):
        """Initialise the screen, sprites, tile bank and map."""
        self._assets = assets
        self.ink = WHITE
        self.sprites = {}
        self.tiles = []
        self.set_map_size(*DEFAULT_MAP_SIZE)
        self.screen(width, height)

    ###########################################################################
    # screen

    def screen(self, width, height):
        """Set screen size and clear all screens to black."""
        error.throw_if(width <= 0 or height <= 0)
        self.width, self.height = width, height
        self._screens = {0: self._blank()}
        self._current = 0
        self.front = self._blank()
        self.texts = []
        self.scroll_x, self.scroll_y = 0, 0

    def _blank(self, colour=BLACK):
        """New RGB buffer of screen size."""
        buf = numpy.zeros((self.height, self.width, 3), dtype=numpy.uint8)
        buf[:, :] = colour
        return buf

    @property
    def back(self):
        """Back buffer of the current screen."""
        return self._screens[self._current]

    @property
    def current_screen(self):
        """Number of the screen being drawn on."""
        return self._current

    def select_screen(self, number):
        """Select the screen to draw on, creating it if needed."""
        error.range_check(0, 7, number)
        if number not in self._screens:
            self._screens[number] = self._blank()
        self._current = number

    def clear(self, colour=BLACK):
        """Clear the current screen and the display."""
        self.back[:, :] = colour
        self.front[:, :] = colour
        self.texts = []

    def set_ink(self, colour):
        """Set the drawing colour."""
        self.ink = tuple(max(0, min(255, _c)) for _c in colour)

    def scroll(self, x, y):
        """Set the map scroll offset."""
        self.scroll_x, self.scroll_y = x, y

    def load_background(self, name):
        """Load an image into the current screen."""
        image = self._assets.load_image(name)
        height = min(self.height, image.shape[0])
        width = min(self.width, image.shape[1])
        self.back[:height, :width] = image[:height, :width]

    ###########################################################################
    # drawing

    def plot(self, x, y, colour=None):
        """Set a pixel; pixels off screen are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.back[y, x] = self.ink if colour is None else colour

    def line(self, x0, y0, x1, y1, colour=None):
        """Draw a line with Bresenham's algorithm."""
        dx, sx = abs(x1 - x0), 1 if x0 < x1 else -1
        dy, sy = -abs(y1 - y0), 1 if y0 < y1 else -1
        err = dx + dy
        while True:
            self.plot(x0, y0, colour)
            if x0 == x1 and y0 == y1:
                break
            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x0 += sx
            if e2 <= dx:
                err += dx
                y0 += sy

    def box(self, x0, y0, x1, y1, colour=None):
        """Draw a rectangle outline."""
        x0, x1 = sorted((x0, x1))
        y0, y1 = sorted((y0, y1))
        self.line(x0, y0, x1, y0, colour)
        self.line(x1, y0, x1, y1, colour)
        self.line(x1, y1, x0, y1, colour)
        self.line(x0, y1, x0, y0, colour)

    def bar(self, x0, y0, x1, y1, colour=None):
        """Draw a filled rectangle, clipped to the screen."""
        x0, x1 = sorted((x0, x1))
        y0, y1 = sorted((y0, y1))
        x0, x1 = max(0, x0), min(self.width - 1, x1)
        y0, y1 = max(0, y0), min(self.height - 1, y1)
        if x0 <= x1 and y0 <= y1:
            self.back[y0:y1+1, x0:x1+1] = self.ink if colour is None else colour

    def draw_text(self, x, y, text):
        """Place text on the screen; the host renders it with its own font."""
        # text at the same position replaces the earlier text
        texts = [_t for _t in self.texts if _t[:2] != (x, y)]
        texts.append((x, y, text, self.ink))
        self.texts = texts[-MAX_TEXTS:]

    ###########################################################################
    # sprites

    def _get_sprite(self, number):
        """Retrieve a sprite or raise IFC."""
        try:
            return self.sprites[number]
        except KeyError:
            raise error.BASICError(error.IFC, detail='sprite %d not defined' % number)

    def create_sprite(self, number, width, height):
        """Create a blank, transparent sprite."""
        error.throw_if(width <= 0 or height <= 0)
        frame = numpy.zeros((height, width, 3), dtype=numpy.uint8)
        frame[:, :] = TRANSPARENT_KEY
        self.sprites[number] = Sprite([frame])

    def load_sprite(self, number, name):
        """Load a sprite image, replacing all frames."""
        image = self._assets.load_image(name)
        if number in self.sprites:
            sprite = self.sprites[number]
            sprite.frames, sprite.frame = [image], 0
        else:
            self.sprites[number] = Sprite([image])

    def add_frame(self, number, name):
        """Append an animation frame to a sprite."""
        image = self._assets.load_image(name)
        if number not in self.sprites:
            self.sprites[number] = Sprite([image])
        else:
            self.sprites[number].frames.append(image)

    def set_sprite_frame(self, number, frame):
        """Select the displayed animation frame."""
        sprite = self._get_sprite(number)
        error.range_check(0, len(sprite.frames) - 1, frame)
        sprite.frame = frame

    def sprite_pos(self, number, x, y):
        """Move a sprite."""
        sprite = self._get_sprite(number)
        sprite.x, sprite.y = x, y

    def sprite_handle(self, number, x, y):
        """Set the sprite's hot spot."""
        self._get_sprite(number).handle = (x, y)

    def sprite_on(self, number):
        """Show a sprite."""
        self._get_sprite(number).visible = True

    def sprite_off(self, number):
        """Hide a sprite."""
        self._get_sprite(number).visible = False

    def hit(self, number0, number1):
        """Bounding-box collision of two visible sprites."""
        sprite0, sprite1 = self.sprites.get(number0), self.sprites.get(number1)
        if not sprite0 or not sprite1 or not sprite0.visible or not sprite1.visible:
            return False
        x0, y0, w0, h0 = sprite0.bounds
        x1, y1, w1, h1 = sprite1.bounds
        return x0 < x1 + w1 and x1 < x0 + w0 and y0 < y1 + h1 and y1 < y0 + h0

    ###########################################################################
    # tiles and map

    def load_tiles(self, name):
        """Load a tile bank, cutting the image into square tiles row by row."""
        image = self._assets.load_image(name)
        rows, cols = image.shape[0] // TILE_SIZE, image.shape[1] // TILE_SIZE
        if not rows or not cols:
            logging.warning('Tile image %s is smaller than one tile', name)
        self.tiles = [
            image[_r*TILE_SIZE:(_r+1)*TILE_SIZE, _c*TILE_SIZE:(_c+1)*TILE_SIZE].copy()
            for _r in range(rows) for _c in range(cols)
        ]

    def set_map_size(self, width, height):
        """Resize the map and clear all layers."""
        error.throw_if(width <= 0 or height <= 0)
        self.map_width, self.map_height = width, height
        self.layers = {0: self._empty_layer()}

    def _empty_layer(self):
        """New layer of empty tiles."""
        return numpy.full((self.map_height, self.map_width), EMPTY_TILE, dtype=numpy.int32)

    def set_tile(self, x, y, tile, layer=0):
        """Set a map cell; cells off the map are ignored."""
        error.throw_if(layer < 0)
        if layer not in self.layers:
            self.layers[layer] = self._empty_layer()
        if 0 <= x < self.map_width and 0 <= y < self.map_height:
            self.layers[layer][y, x] = tile

    def get_tile(self, layer, x, y):
        """Tile number at a map cell; empty off the map or on an undefined layer."""
        if layer not in self.layers or not (0 <= x < self.map_width and 0 <= y < self.map_height):
            return EMPTY_TILE
        return int(self.layers[layer][y, x])

    def load_map(self, name):
        """Load map size and layers from a JSON document."""
        doc = self._assets.load_json(name)
        try:
            layers = doc.get('layers') or [doc['tiles']]
            height = int(doc.get('height', len(layers[0])))
            width = int(doc.get('width', len(layers[0][0]) if layers[0] else 0))
            self.set_map_size(width, height)
            for number, rows in enumerate(layers):
                self.layers[number] = self._empty_layer()
                for y, row in enumerate(rows[:height]):
                    for x, tile in enumerate(row[:width]):
                        self.layers[number][y, x] = int(tile)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
            logging.warning('Malformed map file %s: %r', name, e)
            raise error.BASICError(error.IFC, detail='not a valid map file')

    def draw_map(self, layer=0):
        """Draw a map layer to the current screen at the scroll offset."""
        if layer not in self.layers:
            return
        cells = self.layers[layer]
        for y in range(self.map_height):
            for x in range(self.map_width):
                tile = int(cells[y, x])
                if 0 <= tile < len(self.tiles):
                    self._blit(
                        self.back, self.tiles[tile],
                        x*TILE_SIZE - self.scroll_x, y*TILE_SIZE - self.scroll_y
                    )

    ###########################################################################
    # display

    def refresh(self):
        """Copy the current screen to the display and draw visible sprites on top."""
        self.front = self.back.copy()
        for number in sorted(self.sprites):
            sprite = self.sprites[number]
            if sprite.visible:
                left, top, _, _ = sprite.bounds
                self._blit(self.front, sprite.image, left, top, TRANSPARENT_KEY)

    def _blit(self, target, image, left, top, key=None):
        """Copy an image onto a buffer, clipped, skipping key-coloured pixels."""
        height, width = image.shape[:2]
        x0, y0 = max(0, left), max(0, top)
        x1, y1 = min(self.width, left + width), min(self.height, top + height)
        if x0 >= x1 or y0 >= y1:
            return
        src = image[y0-top:y1-top, x0-left:x1-left]
        dst = target[y0:y1, x0:x1]
        if key is None:
            dst[:, :] = src
        else:
            mask = numpy.any(src != key, axis=2)
            dst[mask] = src[mask]
