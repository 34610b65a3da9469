"""
Pickleball Tracker Test Suite
=============================

- Engine tests are pure and fast: they build matches in memory.
- Database tests run against a throwaway SQLite file per test.
"""
