"""Radial bubble mindmaps from topic trees."""
