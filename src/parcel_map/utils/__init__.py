"""Utility helpers for parcel_map."""
