"""Command-line scripts for dip_radar."""
