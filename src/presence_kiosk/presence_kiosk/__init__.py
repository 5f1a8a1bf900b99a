"""Presence Kiosk package.

Tracks students moving between a classroom and the library from barcode
scans. Organized by feature modules (students, events, presence, transfers,
reconciler) with a thin Flask controller layer over service/repository layers.
"""
