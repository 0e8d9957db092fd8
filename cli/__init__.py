"""Command-line front end for promptbridge."""
