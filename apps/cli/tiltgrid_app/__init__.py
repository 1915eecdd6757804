"""Command-line front end for tiltgrid."""
