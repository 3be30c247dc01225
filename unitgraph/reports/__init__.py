"""Report generation for UnitGraph."""
