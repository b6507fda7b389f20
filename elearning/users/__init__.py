"""
E-Learning Users Package

Dieses Paket enthält alle Module für die Benutzerverwaltung im E-Learning-System.

Features:
- Benutzerprofile mit Stripe-Kundennummer und Abo-Plan
- Gekaufte Kurse (CourseOwnership)
- JWT-basierte Authentifizierung über HTTP-only Cookies
- Automatische Profilerstellung durch Django-Signale

Struktur:
- models.py: Benutzerprofile, Kursbesitz und Signal-Handler
- serializers.py: API-Serialisierung für Benutzerdaten
- views/: Authentifizierungs- und Benutzer-Views

Author: DSP Development Team
Version: 1.0.0
"""
