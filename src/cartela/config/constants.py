"""
Constantes globais da Cartela.

Centraliza os valores 'hardcoded' da campanha: itens, chaves de
armazenamento, tabela de QR codes e endpoints do backend.
"""

from typing import Dict, Set, Tuple

# ============================================================================
# Definições de Domínio
# ============================================================================

# Itens colecionáveis da cartela, na ordem de exibição
ITEM_KEYS: Tuple[str, ...] = ("item_1", "item_2", "item_3", "item_4")

# Backends de armazenamento suportados
VALID_STORE_BACKENDS: Set[str] = {"cookie", "memory"}

# Token do QR -> item (injetiva, nunca alterada em tempo de execução)
DEFAULT_QR_CODES: Dict[str, str] = {
    "h4f9k2w7p1xR": "item_1",
    "z8m3n6v2b9qE": "item_2",
    "a1s7d4f2g9kL": "item_3",
    "p5o8i3u7y2tW": "item_4",
}

# ============================================================================
# Armazenamento (sufixos das chaves, prefixadas pelo ACTID)
# ============================================================================

USER_ID_SUFFIX = "user_id"
ITEM_STATE_SUFFIX = "{item_key}_state"
REDEEM_STATE_SUFFIX = "redeem_state"
TOKEN_SUFFIX = "token"

# ============================================================================
# Logging
# ============================================================================

LEVEL_VALUES: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "SUCCESS": 25,  # Nível customizado
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

# ============================================================================
# Backend
# ============================================================================

ENDPOINTS = {
    "auth_token_get": "api/auth_token_get",
}

# Sentinela de token recusado em respostas {status: false, msg: ...}
UNAUTHORIZED_MSG = "Unauthorized"

# URL
TOKEN_QUERY_PARAM = "token"

# ============================================================================
# Padrões
# ============================================================================

DEFAULTS = {
    "actid": "web_2025_itf_forest",
    "base_url": "https://starlitetw.com/",
    "expires_days": 7,
    "timeout_api": 30,
    "cookie_file": "cartela_cookies.txt",
    "password_env": "CARTELA_API_PASSWORD",
    "config_file": "cartela.yaml",
}

# Reset escondido: cliques necessários e intervalo máximo entre eles (s)
HIDDEN_RESET_CLICKS = 8
HIDDEN_RESET_WINDOW = 3.0

# Títulos dos avisos exibidos ao usuário (textos da campanha)
NOTICE_TITLES = {
    "network": "網路或伺服器錯誤",
    "auth": "授權失敗",
    "redeem": "兌換失敗",
}
