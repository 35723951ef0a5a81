"""
Funções de validação reutilizáveis.

Funções puras para validar dados de configuração antes da utilização.
"""

from typing import Any, Iterable, Mapping, Optional, Set

from cartela.core.exceptions import ConfigurationException


class ValidationException(ConfigurationException):
    """Erro base para falhas de validação."""
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, details=details)


def validate_positive_int(value: int, field_name: str, min_value: int = 1) -> None:
    """
    Valida se um número inteiro é positivo ou maior que um mínimo.

    Args:
        value: O valor a ser validado.
        field_name: Nome do campo para mensagem de erro.
        min_value: Valor mínimo aceitável (default: 1).

    Raises:
        ValidationException: Se o valor for menor que min_value.
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationException(
            f"{field_name} deve ser um número inteiro.",
            details={"value": value, "type": type(value).__name__}
        )

    if value < min_value:
        raise ValidationException(
            f"{field_name} deve ser >= {min_value}",
            details={"value": value, "min_value": min_value}
        )


def validate_not_empty(value: Iterable[Any], field_name: str) -> None:
    """Valida se uma coleção (lista, dict, string) não está vazia."""
    if not value:
        raise ValidationException(f"{field_name} não pode estar vazio")


def validate_choice(value: str, valid_choices: Set[str], field_name: str) -> None:
    """
    Valida se um valor único está dentro das opções permitidas.

    Args:
        value: Valor a validar.
        valid_choices: Conjunto de escolhas permitidas.
        field_name: Nome do campo.
    """
    if value not in valid_choices:
        raise ValidationException(
            f"{field_name} inválido: {value}. Use um dos: {', '.join(sorted(valid_choices))}",
            details={"value": value, "valid_choices": sorted(valid_choices)}
        )


def validate_injective_mapping(mapping: Mapping[str, str], valid_values: Iterable[str], field_name: str) -> None:
    """
    Valida que ``mapping`` é injetivo e só aponta para valores permitidos.

    Args:
        mapping: Tabela chave -> valor.
        valid_values: Valores aceitos no lado direito.
        field_name: Nome do campo.
    """
    permitidos = set(valid_values)
    invalidos = {v for v in mapping.values() if v not in permitidos}
    if invalidos:
        raise ValidationException(
            f"{field_name} aponta para itens inválidos: {sorted(invalidos)}",
            details={"invalid_items": sorted(invalidos), "valid_options": sorted(permitidos)}
        )

    vistos: dict[str, str] = {}
    for chave, valor in mapping.items():
        if valor in vistos:
            raise ValidationException(
                f"{field_name} deve ser injetivo: '{chave}' e '{vistos[valor]}' apontam para {valor}",
                details={"item": valor, "tokens": [vistos[valor], chave]}
            )
        vistos[valor] = chave


def validate_type(value: Any, expected_type: type, field_name: str) -> None:
    """
    Valida estritamente se o valor corresponde ao tipo esperado.
    Não aceita conversão implícita (ex: "true" para bool).

    Raises:
        ValidationException: Se o tipo estiver incorreto.
    """
    if value is None:
        return  # Optionals são tratados pelo default do dataclass

    if not isinstance(value, expected_type):
        raise ValidationException(
            f"{field_name} deve ser do tipo {expected_type.__name__}.",
            details={
                "value": value,
                "expected": expected_type.__name__,
                "got": type(value).__name__
            }
        )

    # bool é subclasse de int, mas queremos diferenciar
    if expected_type is int and isinstance(value, bool):
        raise ValidationException(
            f"{field_name} deve ser um inteiro, não booleano.",
            details={"value": value, "expected": "int", "got": "bool"}
        )
