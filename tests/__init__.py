"""Tests for the CrowdTangle API client."""
