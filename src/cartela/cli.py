"""Ponto de entrada da Interface de Linha de Comando (CLI) da Cartela."""

from __future__ import annotations

from typing import Optional

import typer
from typing_extensions import Annotated

from cartela.config import get_config
from cartela.container import ApplicationContainer
from cartela.core.exceptions import CartelaBaseException
from cartela.core.models import VisitorStatus
from cartela.infrastructure.logging import configurar_logging
from cartela.ui.console import get_console, print_error, print_info, print_success, print_warning
from cartela.ui.tables import show_collection_status

app = typer.Typer(
    name="cartela",
    help="Cartela de carimbos: colete os quatro itens e resgate o prêmio.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = get_console()

# Container da execução atual (uma execução = uma carga de página)
_state = {"container": None}


def _container() -> ApplicationContainer:
    container = _state["container"]
    if container is None:
        container = ApplicationContainer()
        _state["container"] = container
    return container


def _mascarar(token: str) -> str:
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}…{token[-4:]}"


@app.callback()
def main(
    config_path: Annotated[
        Optional[str],
        typer.Option("--config", "-c", help="Arquivo YAML de configuração."),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Ativa logs de depuração."),
    ] = False,
) -> None:
    """Carrega a configuração e prepara o container."""
    try:
        app_config = get_config(reload=True, config_path=config_path)
    except CartelaBaseException as e:
        print_error(f"Configuração inválida: {e}")
        raise typer.Exit(code=2)

    if debug:
        app_config.debug = True
    nivel = "DEBUG" if app_config.debug else app_config.logging.nivel_minimo
    logger = configurar_logging(app_config.logging, nivel_minimo=nivel)
    logger.atualizar_contexto_padrao(actid=app_config.campaign.actid)

    _state["container"] = ApplicationContainer()


@app.command(help="[bold green]Abre a cartela[/bold green] (opcionalmente a partir da URL de um QR code).")
def abrir(
    url: Annotated[Optional[str], typer.Argument(help="URL escaneada, ex.: https://site/?token=...")] = None,
    iniciar: Annotated[
        bool,
        typer.Option("--iniciar", "-i", help="Começa sem perguntar quando o visitante é novo."),
    ] = False,
) -> None:
    container = _container()
    stamp_card = container.stamp_card()
    location = container.location()
    if url:
        location.replace_url(url)

    try:
        status = stamp_card.bootstrap()
        if status is VisitorStatus.NEW:
            if not (iniciar or typer.confirm("Visitante novo. Começar a cartela?", default=True)):
                print_info("Nada foi gravado.")
                return
            resultado = stamp_card.start_new_visitor()
        else:
            # bootstrap já processou o scan de visitantes recorrentes
            resultado = None
    except CartelaBaseException as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    state = container.collection_state()
    if resultado is not None and resultado.collected:
        print_success(f"Item {resultado.item_key} coletado.")
    if state.redeemed:
        print_info("Prêmio já resgatado.")
    elif state.can_redeem():
        print_success("Todos os itens coletados! Use [highlight]cartela resgatar[/highlight].")


@app.command(help="Mostra os itens coletados e a situação do resgate.")
def status() -> None:
    container = _container()
    state = container.collection_state()
    if state.initialize_from_store() is VisitorStatus.NEW:
        print_warning("Nenhuma cartela iniciada. Use [highlight]cartela abrir[/highlight].")
        raise typer.Exit(code=1)
    show_collection_status(state.items(), state.redeemed, state.visitor_id, state.can_redeem())


@app.command(help="[bold magenta]Resgata o prêmio[/bold magenta] quando os quatro itens foram coletados.")
def resgatar(
    sim: Annotated[bool, typer.Option("--sim", "-y", help="Confirma sem perguntar.")] = False,
) -> None:
    container = _container()
    stamp_card = container.stamp_card()

    try:
        if stamp_card.bootstrap() is VisitorStatus.NEW:
            print_warning("Nenhuma cartela iniciada.")
            raise typer.Exit(code=1)

        if not stamp_card.request_redeem():
            estado = container.collection_state()
            motivo = "prêmio já resgatado" if estado.redeemed else "faltam itens"
            print_warning(f"Resgate indisponível: {motivo}.")
            raise typer.Exit(code=1)

        if not (sim or typer.confirm("Confirmar o resgate? Só pode ser feito uma vez.", default=False)):
            stamp_card.cancel_redeem()
            print_info("Resgate cancelado.")
            return

        if stamp_card.confirm_redeem():
            print_success("🎁 Prêmio resgatado!")
        else:
            print_error("O resgate não foi concluído.")
            raise typer.Exit(code=1)
    except CartelaBaseException as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command(help="Apaga todos os dados da cartela deste dispositivo.")
def limpar(
    forcar: Annotated[bool, typer.Option("--forcar", "-f", help="Não pede confirmação.")] = False,
) -> None:
    if not (forcar or typer.confirm("Apagar todos os itens coletados?", default=False)):
        print_info("Nada foi apagado.")
        return
    _container().stamp_card().clear_and_restart()
    print_success("Dados da cartela apagados.")


@app.command(hidden=True, help="Toques no título da cartela, um por linha da entrada padrão.")
def logo() -> None:
    trigger = _container().hidden_reset()
    for _ in typer.get_text_stream("stdin"):
        if trigger.click():
            print_success("Dados da cartela apagados.")
            return


@app.command(help="Obtém (ou renova) o token de autorização do backend.")
def token(
    renovar: Annotated[bool, typer.Option("--renovar", help="Descarta o token guardado antes.")] = False,
) -> None:
    tokens = _container().token_manager()
    try:
        if renovar:
            tokens.invalidate()
        valor = tokens.check_and_get_token()
    except CartelaBaseException as e:
        print_error(f"Falha de autorização: {e}")
        raise typer.Exit(code=1)
    console.print(f"[success]✔[/success] Token {tokens.state.value}: [info]{_mascarar(valor)}[/info]")


if __name__ == "__main__":
    app()
