"""Workforce Hub package.

This package is organized by feature modules (masterdata, activities, health,
fives, users) with a thin Flask controller layer over service/repository
layers. Derived-state logic (risk scoring, 5S ranking, upcoming windows) lives
in pure modules that never touch the record store.
"""
