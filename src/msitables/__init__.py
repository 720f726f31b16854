"""msitables: compile entity schemas into installer database table artifacts."""

__version__ = "0.1.0"
