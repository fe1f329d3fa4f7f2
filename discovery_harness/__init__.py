# ABOUTME: Top-level package for the action discovery diagnostics harness.
# ABOUTME: Subpackages cover tracing, rule logic, discovery, the test bed, and diagnostics reporting.
