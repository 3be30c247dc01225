"""Core conversion-graph modules for UnitGraph.

This package contains the conversion engine and its inputs:
- errors: Exception hierarchy shared by every module
- conversion: Multiplicative conversion record
- registry: Fixed, ordered set of unit names
- store: Inverse-consistent cache of known conversions
- closure: Single-step derivation and fixpoint driver
- converter: Lazy query façade and completeness check
- config: Measurement definition persistence (JSON)
- catalog: Bundled measurement definitions
- matrix: Read-only diagnostics over the store
- measurement: Value-plus-unit quantities bound to a converter
"""
