"""Qt integration for running sessions off the GUI thread."""
