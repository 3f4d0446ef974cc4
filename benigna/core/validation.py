# benigna-api/benigna/core/validation.py
"""Field validators and display formatters for Brazilian registration data.

Each validator returns a ``ValidationResult`` carrying a pt-BR message meant
to be shown to the user verbatim.
"""
import re
from typing import Iterable, List

from pydantic import BaseModel

from benigna.core.errors import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

CNPJ_WEIGHTS_1 = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
CNPJ_WEIGHTS_2 = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]


class ValidationResult(BaseModel):
    is_valid: bool
    message: str


def _ok(message: str) -> ValidationResult:
    return ValidationResult(is_valid=True, message=message)


def _fail(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, message=message)


def only_digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def validate_email(email: str) -> ValidationResult:
    if not email:
        return _fail("Email é obrigatório")
    if not EMAIL_RE.match(email):
        return _fail("Email inválido")
    return _ok("Email válido")


def validate_password(password: str) -> ValidationResult:
    if not password:
        return _fail("Senha é obrigatória")
    if len(password) < 6:
        return _fail("Senha deve ter pelo menos 6 caracteres")
    if not re.search(r"[a-z]", password):
        return _fail("Senha deve conter pelo menos uma letra minúscula")
    if not re.search(r"\d", password):
        return _fail("Senha deve conter pelo menos um número")
    return _ok("Senha válida")


def _cpf_check_digit(digits: str, length: int) -> int:
    total = sum(int(digits[i]) * (length + 1 - i) for i in range(length))
    remainder = (total * 10) % 11
    return 0 if remainder == 10 else remainder


def validate_cpf(cpf: str) -> ValidationResult:
    clean = only_digits(cpf)
    if not clean:
        return _fail("CPF é obrigatório")
    if len(clean) != 11:
        return _fail("CPF deve ter 11 dígitos")
    if len(set(clean)) == 1:
        return _fail("CPF inválido")
    if _cpf_check_digit(clean, 9) != int(clean[9]):
        return _fail("CPF inválido")
    if _cpf_check_digit(clean, 10) != int(clean[10]):
        return _fail("CPF inválido")
    return _ok("CPF válido")


def _cnpj_check_digit(digits: str, weights: List[int]) -> int:
    remainder = sum(int(d) * w for d, w in zip(digits, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def validate_cnpj(cnpj: str) -> ValidationResult:
    clean = only_digits(cnpj)
    if not clean:
        return _fail("CNPJ é obrigatório")
    if len(clean) != 14:
        return _fail("CNPJ deve ter 14 dígitos")
    if len(set(clean)) == 1:
        return _fail("CNPJ inválido")
    if _cnpj_check_digit(clean, CNPJ_WEIGHTS_1) != int(clean[12]):
        return _fail("CNPJ inválido")
    if _cnpj_check_digit(clean, CNPJ_WEIGHTS_2) != int(clean[13]):
        return _fail("CNPJ inválido")
    return _ok("CNPJ válido")


def validate_phone(phone: str) -> ValidationResult:
    clean = only_digits(phone)
    if not clean:
        return _fail("Telefone é obrigatório")
    if len(clean) < 10 or len(clean) > 11:
        return _fail("Telefone deve ter 10 ou 11 dígitos")
    return _ok("Telefone válido")


def validate_zip_code(zip_code: str) -> ValidationResult:
    clean = only_digits(zip_code)
    if not clean:
        return _fail("CEP é obrigatório")
    if len(clean) != 8:
        return _fail("CEP deve ter 8 dígitos")
    return _ok("CEP válido")


def validate_required(value: str, field_name: str) -> ValidationResult:
    if not value or not value.strip():
        return _fail(f"{field_name} é obrigatório")
    return _ok(f"{field_name} válido")


def validate_min_length(value: str, min_length: int, field_name: str) -> ValidationResult:
    if len(value) < min_length:
        return _fail(f"{field_name} deve ter pelo menos {min_length} caracteres")
    return _ok(f"{field_name} válido")


def validate_max_length(value: str, max_length: int, field_name: str) -> ValidationResult:
    if len(value) > max_length:
        return _fail(f"{field_name} deve ter no máximo {max_length} caracteres")
    return _ok(f"{field_name} válido")


def ensure_valid(results: Iterable[ValidationResult]) -> None:
    """Raise on the first failed result."""
    for result in results:
        if not result.is_valid:
            raise ValidationError(result.message)


def format_zip_code(zip_code: str) -> str:
    return re.sub(r"(\d{5})(\d{3})", r"\1-\2", only_digits(zip_code))


def format_phone(phone: str) -> str:
    clean = only_digits(phone)
    if len(clean) == 10:
        return re.sub(r"(\d{2})(\d{4})(\d{4})", r"(\1) \2-\3", clean)
    if len(clean) == 11:
        return re.sub(r"(\d{2})(\d{5})(\d{4})", r"(\1) \2-\3", clean)
    return phone


def format_cpf(cpf: str) -> str:
    return re.sub(r"(\d{3})(\d{3})(\d{3})(\d{2})", r"\1.\2.\3-\4", only_digits(cpf))


def format_cnpj(cnpj: str) -> str:
    return re.sub(r"(\d{2})(\d{3})(\d{3})(\d{4})(\d{2})", r"\1.\2.\3/\4-\5", only_digits(cnpj))
