"""
Couche infrastructure de ShadowCrawler.

Ce module contient les implementations concretes des interfaces de stockage
definies dans la couche domaine (ports) :

- persistence/ : Catalogue SQLite avec SQLModel (modeles et repositories)
- cache/ : Cache JSON des statistiques de stockage

Architecture hexagonale : changer l'implementation (ex: PostgreSQL au lieu de
SQLite) ne modifie pas la logique metier.
"""
