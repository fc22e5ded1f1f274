"""Analysis services for dip_radar."""
