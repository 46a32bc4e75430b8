"""coachgen: workout program synthesis from an exercise catalog and movement screen."""

__version__ = "0.1.0"
