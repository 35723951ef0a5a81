"""
Serviços de negócio da cartela.

- collection_state: estado persistido dos itens e do resgate
- token_manager: obtenção e renovação do bearer token
- stamp_card_service: regras de coleta, resgate e limpeza escondida
"""
