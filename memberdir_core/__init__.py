"""
memberdir Core Package
======================
Signed membership directory: every record is a member identity claim plus a
payload, both endorsed by a single authority key.

Provides:
- Ed25519 signature verification with classified failure reasons
- Entry model and the two-link chain validator
- Record store with last-writer-wins admission and expiry sweeps
- Pluggable persistence (SQLite default, in-memory for tests)
"""
