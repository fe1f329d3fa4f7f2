# ABOUTME: Exposes the action discovery test bed and its run result type.
# ABOUTME: Provides a stable import location for integration tests that need diagnostics.

from discovery_harness.testbed.action_discovery import ActionDiscoveryTestBed, DiscoveryRun

__all__ = ["ActionDiscoveryTestBed", "DiscoveryRun"]
