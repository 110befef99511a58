"""
User-facing message catalog

Portuguese is the product's primary language; English is kept in sync for
API consumers that ask for it through the LANGUAGE setting.
"""

from typing import Optional

from guestmanager.core.config import settings

CATALOG = {
    "pt": {
        "table_missing": "Mesa {table_number} não existe.",
        "guest_already_seated": "Convidado já está nesta mesa.",
        "table_full": "Mesa {table_number} está cheia ({occupied}/{capacity}).",
        "table_available": "Mesa disponível.",
        "guest_unassigned": "Convidado removido da mesa.",
        "admin_unlimited": "Administradores têm acesso ilimitado.",
        "free_event_limit": "Plano gratuito permite apenas 1 evento",
        "promo_event_limit": "Limite promocional de {limit} eventos atingido",
        "event_allowed": "Criação de evento permitida.",
        "guest_limit": "Limite de {limit} convidados atingido",
        "guests_allowed": "Convidados dentro do limite do plano.",
        "file_empty": "Arquivo vazio ou formato inválido",
        "file_unreadable": "Erro ao ler arquivo: {error}",
        "missing_name_column": "Coluna obrigatória ausente: nome",
        "too_many_columns": "Formato inválido - esperado máximo 4 colunas (nome, email, whatsapp, mesa), encontrado {count}",
        "row_name_empty": "Linha {line}: Nome não pode estar vazio",
        "row_table_invalid": "Linha {line}: Número da mesa inválido \"{value}\"",
    },
    "en": {
        "table_missing": "Table {table_number} does not exist.",
        "guest_already_seated": "Guest is already seated at this table.",
        "table_full": "Table {table_number} is full ({occupied}/{capacity}).",
        "table_available": "Table available.",
        "guest_unassigned": "Guest removed from table.",
        "admin_unlimited": "Admin users have unlimited access.",
        "free_event_limit": "Free plan allows only 1 event",
        "promo_event_limit": "Promotional limit of {limit} events reached",
        "event_allowed": "Event creation allowed.",
        "guest_limit": "Limit of {limit} guests reached",
        "guests_allowed": "Guest count within plan limit.",
        "file_empty": "Empty file or invalid format",
        "file_unreadable": "Error reading file: {error}",
        "missing_name_column": "Missing required column: name",
        "too_many_columns": "Invalid format - expected at most 4 columns (name, email, whatsapp, table), found {count}",
        "row_name_empty": "Line {line}: Name cannot be empty",
        "row_table_invalid": "Line {line}: Invalid table number \"{value}\"",
    },
}


def translate(key: str, language: Optional[str] = None, **params) -> str:
    """Render a catalog message, falling back to Portuguese for unknown languages"""
    catalog = CATALOG.get(language or settings.LANGUAGE, CATALOG["pt"])
    return catalog[key].format(**params)
