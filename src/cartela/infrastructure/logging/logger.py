"""Logger da Cartela com API em português e saída colorida via Rich.

Uso típico::

    from cartela.infrastructure.logging import get_logger

    log = get_logger()
    log.info("Cartela carregada", actid="web_2025_itf_forest")

    with log.etapa("Resgate", visitante="user_123"):
        ...  # o bloco pode levantar exceções normalmente

    visitante_log = log.com_contexto(visitante="user_123")
    visitante_log.sucesso("Item coletado", item="item_1")
"""

from __future__ import annotations

import atexit
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from cartela.config.constants import LEVEL_VALUES
from cartela.config.models import LoggerConfig

# Mapas auxiliares ---------------------------------------------------------

_LEVEL_MAP: Dict[str, int] = {
    "debug": LEVEL_VALUES["DEBUG"],
    "info": LEVEL_VALUES["INFO"],
    "sucesso": LEVEL_VALUES["SUCCESS"],
    "aviso": LEVEL_VALUES["WARNING"],
    "erro": LEVEL_VALUES["ERROR"],
    "critico": LEVEL_VALUES["CRITICAL"],
}

_CONFIG_LEVELS: Dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "SUCCESS": "sucesso",
    "WARNING": "aviso",
    "ERROR": "erro",
    "CRITICAL": "critico",
}

_DEFAULT_THEME = Theme(
    {
        "log.time": "cyan dim",
        "log.debug": "dim",
        "log.info": "white",
        "log.sucesso": "bold green",
        "log.aviso": "yellow",
        "log.erro": "bold red",
        "log.critico": "white on red",
        "log.contexto": "bright_black",
    }
)


class CartelaLogger:
    """Implementação principal do logger com API em português."""

    def __init__(self, config: Optional[LoggerConfig] = None, console: Optional[Console] = None) -> None:
        self._lock = threading.RLock()
        self._arquivo_handle = None
        self._atexit_registrado = False
        self._contexto_padrao: Dict[str, Any] = {}
        self._console_fixo = console
        self.configure(config or LoggerConfig())

    # ------------------------------------------------------------------
    # Configuracao e contexto
    # ------------------------------------------------------------------

    @property
    def config(self) -> LoggerConfig:
        """Retorna a configuracao ativa para fins de inspecao."""

        return self._config

    def configure(self, config: LoggerConfig) -> None:
        """Aplica uma nova configuração ao logger.

        Args:
            config: Instância pronta de :class:`LoggerConfig`.
        """

        with self._lock:
            self._config = config
            chave = _CONFIG_LEVELS.get(config.nivel_minimo.upper(), "info")
            self._nivel_minimo = _LEVEL_MAP[chave]

            if self._console_fixo is not None:
                self._console = self._console_fixo
            elif config.usar_cores:
                self._console = Console(theme=_DEFAULT_THEME, highlight=False, stderr=True)
            else:
                self._console = Console(highlight=False, no_color=True, stderr=True)

            if self._arquivo_handle:
                self._arquivo_handle.close()
                self._arquivo_handle = None

    def atualizar_contexto_padrao(self, **dados: Any) -> None:
        """Adiciona ou atualiza campos que aparecem em todos os logs."""
        with self._lock:
            self._contexto_padrao.update({k: v for k, v in dados.items() if v is not None})

    def limpar_contexto_padrao(self, *chaves: str) -> None:
        """Remove campos do contexto padrão (todos, quando nenhuma chave é dada)."""
        with self._lock:
            if not chaves:
                self._contexto_padrao.clear()
                return
            for chave in chaves:
                self._contexto_padrao.pop(chave, None)

    def com_contexto(self, **dados: Any) -> "ScopedLogger":
        """Retorna um logger derivado com contexto adicional.

        Ideal para anexar informacoes fixas (ex.: visitante, item) sem
        repetir kwargs em todas as chamadas.
        """

        contexto = {k: v for k, v in dados.items() if v is not None}
        return ScopedLogger(self, contexto)

    # ------------------------------------------------------------------
    # API publica de logging
    # ------------------------------------------------------------------

    def debug(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("debug", mensagem, dados, None)

    def info(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("info", mensagem, dados, None)

    def sucesso(self, mensagem: str, **dados: Any) -> None:
        """Emite log nível SUCESSO (25)."""
        self.registrar_evento("sucesso", mensagem, dados, None)

    def aviso(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("aviso", mensagem, dados, None)

    def erro(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("erro", mensagem, dados, None)

    def critico(self, mensagem: str, **dados: Any) -> None:
        self.registrar_evento("critico", mensagem, dados, None)

    @contextmanager
    def etapa(self, titulo: str, **dados: Any):
        """Context manager que registra início, sucesso e falha de uma etapa."""

        with _etapa(self, titulo, dados, None):
            yield

    # ------------------------------------------------------------------
    # Implementacao interna
    # ------------------------------------------------------------------

    def deve_emitir(self, nivel: str) -> bool:
        """Indica se o nível solicitado deve ser emitido."""

        return _LEVEL_MAP.get(nivel, _LEVEL_MAP["info"]) >= self._nivel_minimo

    def registrar_evento(
        self,
        nivel: str,
        mensagem: str,
        dados: Mapping[str, Any],
        contexto_extra: Optional[Mapping[str, Any]],
    ) -> None:
        """Consolida dados, contexto e emissões em console/arquivo."""

        if not self.deve_emitir(nivel):
            return

        dados_limpos = {k: v for k, v in (dados or {}).items() if v is not None}
        instante = datetime.now()

        with self._lock:
            contexto = dict(self._contexto_padrao)
            if contexto_extra:
                contexto.update({k: v for k, v in contexto_extra.items() if v is not None})

            extras_partes = self.formatar_dict(contexto) + self.formatar_dict(dados_limpos)
            extras_texto = " ".join(extras_partes)

            texto = Text()
            if self._config.mostrar_tempo:
                texto.append(instante.strftime("%H:%M:%S"), style="log.time")
                texto.append("  ")

            estilo = f"log.{nivel}"
            texto.append(f"[{nivel.upper()}]", style=estilo)
            texto.append("  ")
            texto.append(mensagem, style=estilo)

            if extras_texto:
                texto.append("  ")
                texto.append(extras_texto, style="log.contexto")

            self._console.print(texto)

            if self._config.arquivo_log:
                self._escrever_arquivo(instante, nivel, mensagem, contexto, dados_limpos)

    def _escrever_arquivo(
        self,
        instante: datetime,
        nivel: str,
        mensagem: str,
        contexto: Mapping[str, Any],
        dados: Mapping[str, Any],
    ) -> None:
        if self._arquivo_handle is None:
            path = Path(self._config.arquivo_log)
            path.parent.mkdir(parents=True, exist_ok=True)
            modo = "w" if self._config.sobrescrever_arquivo else "a"
            self._arquivo_handle = path.open(modo, encoding="utf-8")
            if not self._atexit_registrado:
                atexit.register(self.close)
                self._atexit_registrado = True

        partes = [instante.strftime("%Y-%m-%d %H:%M:%S"), nivel.upper(), mensagem]
        if contexto:
            partes.append("contexto=" + ",".join(self.formatar_dict(contexto)))
        if dados:
            partes.append("dados=" + ",".join(self.formatar_dict(dados)))
        self._arquivo_handle.write(" | ".join(partes) + "\n")
        self._arquivo_handle.flush()

    def close(self) -> None:
        """Fecha o arquivo de log (quando houver)."""

        with self._lock:
            if self._arquivo_handle is not None:
                self._arquivo_handle.close()
                self._arquivo_handle = None

    @staticmethod
    def formatar_valor(valor: Any) -> str:
        """Transforma valores em representação amigável para logs."""

        if isinstance(valor, (int, float)):
            return str(valor)
        if isinstance(valor, str):
            if valor.strip() == valor and " " not in valor:
                return valor
            return repr(valor)
        return repr(valor)

    @classmethod
    def formatar_dict(cls, valores: Mapping[str, Any]) -> list[str]:
        """Converte dicionários em pares ``chave=valor`` ordenados."""

        return [f"{chave}={cls.formatar_valor(valores[chave])}" for chave in sorted(valores)]


class ScopedLogger:
    """Wrapper leve para adicionar contexto fixo em um logger existente."""

    def __init__(self, base: CartelaLogger, contexto: Mapping[str, Any]) -> None:
        self._base = base
        self._contexto = dict(contexto)

    def com_contexto(self, **dados: Any) -> "ScopedLogger":
        novo = dict(self._contexto)
        novo.update({k: v for k, v in dados.items() if v is not None})
        return ScopedLogger(self._base, novo)

    def debug(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("debug", mensagem, dados, self._contexto)

    def info(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("info", mensagem, dados, self._contexto)

    def sucesso(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("sucesso", mensagem, dados, self._contexto)

    def aviso(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("aviso", mensagem, dados, self._contexto)

    def erro(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("erro", mensagem, dados, self._contexto)

    def critico(self, mensagem: str, **dados: Any) -> None:
        self._base.registrar_evento("critico", mensagem, dados, self._contexto)

    @contextmanager
    def etapa(self, titulo: str, **dados: Any):
        with _etapa(self._base, titulo, dados, self._contexto):
            yield


@contextmanager
def _etapa(
    base: CartelaLogger,
    titulo: str,
    dados: Mapping[str, Any],
    contexto: Optional[Mapping[str, Any]],
):
    dados_limpos = {k: v for k, v in dados.items() if v is not None}
    base.registrar_evento("info", f"Iniciando etapa: {titulo}", dados_limpos, contexto)
    try:
        yield
    except Exception as e:
        base.registrar_evento("erro", f"Falha na etapa: {titulo}", {**dados_limpos, "erro": str(e)}, contexto)
        raise
    else:
        base.registrar_evento("sucesso", f"Etapa concluida: {titulo}", dados_limpos, contexto)
