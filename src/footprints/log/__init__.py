"""Writing activity records to the vault."""
