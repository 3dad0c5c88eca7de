"""
Amos BASIC - files.py
Asset file name resolution and image loading

(c) 2013--2022 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""

import os
import json
import logging

import numpy

from .base import error
from .base import codestream


class Assets(object):
    """Resolve asset file names relative to the asset directory."""

    def __init__(self, asset_dir=''):
        """Initialise the asset directory."""
        self._dir = asset_dir or ''

    def resolve(self, name):
        """Native path for an asset name, which may be quoted."""
        name = codestream.unquote(name)
        error.throw_if(not name, error.BAD_FILE_NAME)
        if os.path.isabs(name):
            return name
        return os.path.join(self._dir, name)

    def find(self, name):
        """Native path for an existing asset file."""
        path = self.resolve(name)
        if not os.path.isfile(path):
            raise error.BASICError(error.FILE_NOT_FOUND, detail=path)
        return path

    def load_image(self, name):
        """Load an image as an RGB array of shape (height, width, 3)."""
        path = self.find(name)
        if path.lower().endswith('.npy'):
            pixels = numpy.load(path)
        else:
            pixels = _load_with_pygame(path)
        error.throw_if(pixels.ndim != 3 or pixels.shape[2] < 3, error.IFC, 'not an RGB image: %s' % path)
        return numpy.ascontiguousarray(pixels[:, :, :3], dtype=numpy.uint8)

    def load_json(self, name):
        """Load a JSON document."""
        path = self.find(name)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except ValueError as e:
            logging.warning('Could not parse %s: %s', path, e)
            raise error.BASICError(error.IFC, detail='not a valid map file: %s' % path)


def _load_with_pygame(path):
    """Load an image file through pygame."""
    try:
        import pygame
        import pygame.surfarray
    except ImportError:
        raise error.BASICError(error.ADVANCED_FEATURE, detail='module `pygame` not found')
    try:
        surface = pygame.image.load(path)
    except pygame.error as e:
        logging.warning('Could not load image %s: %s', path, e)
        raise error.BASICError(error.IFC, detail='not a valid image: %s' % path)
    # surfarray is indexed by x, y
    return pygame.surfarray.array3d(surface).swapaxes(0, 1)
