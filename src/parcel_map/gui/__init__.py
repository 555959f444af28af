"""Qt user interface for parcel_map."""
