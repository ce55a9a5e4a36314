"""Tests for hybridengines."""
