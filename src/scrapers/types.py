from typing import TypedDict

class ReactionRecord(TypedDict):
    index: int
    reaction_type: str
    user_name: str
    current_role: str
    profile_link: str

# Orden fijo de columnas del CSV y títulos literales de cabecera
RECORD_COLUMNS = ('index', 'reaction_type', 'user_name', 'current_role', 'profile_link')
RECORD_HEADERS = ('Index', 'Reaction Type', 'User Name', 'Current Role', 'Profile Link')
