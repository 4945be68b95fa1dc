"""Static reference data for EV Journal."""
