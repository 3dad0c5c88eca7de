"""
Amos BASIC - display.py
Graphics, sprite and map statements

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

from .base import signals


class Display(object):
    """Graphics statements, forwarded to the graphics facade."""

    def __init__(self, queues, graphics, on_changed=None):
        """Initialise display statements."""
        self._queues = queues
        self._graphics = graphics
        # host hook called when a redraw is needed
        self._on_changed = on_changed

    def changed(self):
        """Notify the host that the graphics need to be redrawn."""
        self._queues.video.put(signals.Event(signals.VIDEO_UPDATE))
        if self._on_changed:
            self._on_changed()

    # screen

    def screen_(self, args):
        """SCREEN: set screen size and clear."""
        width, height = args
        self._graphics.screen(width, height)
        self.changed()

    def screen_select_(self, args):
        """SCREEN SELECT: choose the screen to draw on."""
        number, = args
        self._graphics.select_screen(number)

    def scroll_(self, args):
        """SCROLL: set the map scroll offset."""
        x, y = args
        self._graphics.scroll(x, y)

    def clsg_(self, args):
        """CLSG: clear the graphics screen."""
        list(args)
        self._graphics.clear()
        self.changed()

    def load_(self, args):
        """LOAD: load a background image."""
        name, = args
        self._graphics.load_background(name)
        self.changed()

    def ink_(self, args):
        """INK: set the drawing colour."""
        colour, = args
        self._graphics.set_ink(colour)

    # drawing

    def plot_(self, args):
        """PLOT: set a pixel."""
        x, y = args
        self._graphics.plot(x, y)
        self.changed()

    def line_(self, args):
        """LINE: draw a line."""
        self._graphics.line(*args)
        self.changed()

    def box_(self, args):
        """BOX: draw a rectangle outline."""
        self._graphics.box(*args)
        self.changed()

    def bar_(self, args):
        """BAR: draw a filled rectangle."""
        self._graphics.bar(*args)
        self.changed()

    def text_(self, args):
        """TEXT: draw text."""
        x, y, text = args
        self._graphics.draw_text(x, y, text)
        self.changed()

    def refresh_(self, args):
        """REFRESH: show the screen with sprites."""
        list(args)
        self._graphics.refresh()
        self.changed()

    # sprites

    def sprite_(self, args):
        """SPRITE: create a blank sprite."""
        number, width, height = args
        self._graphics.create_sprite(number, width, height)

    def sprite_pos_(self, args):
        """SPRITE POS: move a sprite."""
        self._graphics.sprite_pos(*args)

    def sprite_load_(self, args):
        """SPRITE LOAD: load a sprite image."""
        number, name = args
        self._graphics.load_sprite(number, name)

    def sprite_addframe_(self, args):
        """SPRITE ADDFRAME: add an animation frame."""
        number, name = args
        self._graphics.add_frame(number, name)

    def sprite_frame_(self, args):
        """SPRITE FRAME: select an animation frame."""
        self._graphics.set_sprite_frame(*args)

    def sprite_handle_(self, args):
        """SPRITE HANDLE: set the hot spot."""
        self._graphics.sprite_handle(*args)

    def sprite_on_(self, args):
        """SPRITE ON: show a sprite."""
        number, = args
        self._graphics.sprite_on(number)

    def sprite_off_(self, args):
        """SPRITE OFF: hide a sprite."""
        number, = args
        self._graphics.sprite_off(number)

    # tiles and map

    def tile_load_(self, args):
        """TILE LOAD: load a tile bank."""
        name, = args
        self._graphics.load_tiles(name)

    def tile_map_(self, args):
        """TILE MAP: set the map size in tiles."""
        width, height = args
        self._graphics.set_map_size(width, height)

    def tile_set_(self, args):
        """TILE SET: set a map cell."""
        x, y, tile, layer = args
        self._graphics.set_tile(x, y, tile, layer or 0)

    def tile_draw_(self, args):
        """TILE DRAW: draw a map layer."""
        layer, = args
        self._graphics.draw_map(layer or 0)
        self.changed()

    def map_load_(self, args):
        """MAP LOAD: load the map."""
        name, = args
        self._graphics.load_map(name)
