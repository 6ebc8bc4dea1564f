"""Engine services: allocation, scoring, game evaluation and settlement."""
