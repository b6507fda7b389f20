"""
E-Learning Package - DSP (Digital Solutions Platform)

Dieses Paket enthält den Kurskatalog und die Kundenkonten des Kursshops.

Features:
- Kurskatalog mit Kategorien und Lektionen
- Benutzerverwaltung und Authentifizierung (JWT in HTTP-only Cookies)
- Kursbesitz aus Einmalkäufen und Zugriff über Abos

Struktur:
- users/: Benutzerverwaltung, Profile und Kursbesitz
- courses/: Kurse und Lektionen
- management/: Django Management Commands (seed_courses)

Author: DSP Development Team
Version: 1.0.0
"""
