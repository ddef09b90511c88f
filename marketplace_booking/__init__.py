"""Availability and booking engine for a multi-vendor service marketplace."""
