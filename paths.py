"""Centralización de rutas de almacenamiento.

Evita repetir os.path.join(...) disperso. Si cambia la estructura, se ajusta aquí.
"""
from __future__ import annotations
import os
from functools import lru_cache

# Raíz del repositorio: este archivo vive en la raíz, por lo que dirname(__file__) es la raíz.
REPO_ROOT = os.path.abspath(os.path.dirname(__file__))

DATA_DIR = os.path.join(REPO_ROOT, 'data')
STORAGE_DIR = os.path.join(DATA_DIR, 'storage')
USER_DATA_DIR = os.path.join(STORAGE_DIR, 'linkedin_user_data')
OUTPUT_DIR = os.path.join(DATA_DIR, 'output')
CONFIG_DIR = os.path.join(DATA_DIR, 'config')
LOGS_DIR = os.path.join(REPO_ROOT, 'logs')

DEFAULT_OUTPUT_PATH = os.path.join(OUTPUT_DIR, 'linkedin_reactions_data.csv')

ALL_DIRS = [STORAGE_DIR, USER_DATA_DIR, OUTPUT_DIR, CONFIG_DIR, LOGS_DIR]


@lru_cache(maxsize=None)
def ensure_dirs() -> None:
    for d in ALL_DIRS:
        os.makedirs(d, exist_ok=True)


__all__ = [
    'REPO_ROOT', 'DATA_DIR', 'STORAGE_DIR', 'USER_DATA_DIR', 'OUTPUT_DIR',
    'CONFIG_DIR', 'LOGS_DIR', 'DEFAULT_OUTPUT_PATH', 'ensure_dirs'
]
