"""
Amos BASIC - interface.base
Interface utility classes

(c) 2013--2023 Rob Hagemans
This file is released under the GNU GPL version 3 or later.
"""


# message displayed when waiting to close
WAIT_MESSAGE = 'Press Enter to close'


class InitFailed(Exception):
    """Initialisation failed."""


class PluginRegister(object):
    """Plugin register."""

    def __init__(self):
        """Initialise plugin register."""
        self._plugins = {}

    def register(self, name):
        """Decorator to register a plugin."""
        def decorated_plugin(cls):
            self._plugins[name] = cls
            return cls
        return decorated_plugin

    def __getitem__(self, name):
        """Retrieve plugin."""
        return self._plugins[name]

    def __contains__(self, name):
        """Plugin is registered."""
        return name in self._plugins

    def names(self):
        """Registered plugin names."""
        return sorted(self._plugins)


###############################################################################
# plugin registers

video_plugins = PluginRegister()
audio_plugins = PluginRegister()
