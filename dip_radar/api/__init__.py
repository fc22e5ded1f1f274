"""HTTP API helpers for dip_radar."""
