"""
Núcleo da Cartela: entidades, serviços, interfaces e exceções.

Os submódulos são importados diretamente (``cartela.core.services...``)
para manter este pacote livre de dependências circulares com ``config``.
"""
