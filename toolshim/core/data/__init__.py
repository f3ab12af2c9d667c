"""Static data tables. No logic lives here."""
