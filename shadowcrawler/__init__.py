"""
ShadowCrawler - Catalogue de vidéothèque personnelle.

Ce package indexe une arborescence de vidéos dans un catalogue consultable :
découverte des fichiers, extraction des métadonnées techniques et des miniatures
(ffprobe/ffmpeg), persistance incrémentale et statistiques de stockage.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (indexation, analyse, requêtes)
- adapters/ : Couche adaptateurs (CLI, système de fichiers, ffprobe)
- infrastructure/ : Persistance SQLite et cache des statistiques
"""

__version__ = "0.1.0"
