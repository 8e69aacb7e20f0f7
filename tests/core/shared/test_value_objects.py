"""
Testes Unitários para Value Objects compartilhados.

Coverage:
- Money: criação, aritmética, política de saldo negativo
- Quantity: não negatividade
- Percentage: igualdade tolerante
- CPF, DateOfBirth, Name, Email, Password, Period
- PaginationParams
"""

from datetime import date
from decimal import Decimal

import pytest

from src.core.shared.exceptions import (
    CurrencyMismatchError,
    InsufficientQuantityError,
    InvalidCPFError,
    InvalidDateOfBirthError,
    InvalidPeriodError,
    NegativeBalanceError,
    ValidationError,
)
from src.core.shared.interfaces import PaginationParams
from src.core.shared.value_objects import (
    CPF,
    DateOfBirth,
    Email,
    Money,
    Name,
    Password,
    Percentage,
    Period,
    Quantity,
    to_decimal,
)


class TestToDecimal:
    """Testes para conversão numérica."""

    def test_float_sem_ruido(self):
        """Deve converter float pela representação textual."""
        assert to_decimal(0.1, "amount") == Decimal("0.1")

    @pytest.mark.parametrize("value", ["abc", None, True, "NaN", "Infinity"])
    def test_valor_invalido_erro(self, value):
        """Deve rejeitar valores não numéricos ou não finitos."""
        with pytest.raises(ValidationError) as exc_info:
            to_decimal(value, "amount")

        assert exc_info.value.field == "amount"


class TestMoney:
    """Testes para Money."""

    def test_criar_money(self):
        """Deve criar valor em BRL por padrão."""
        money = Money.create("32.50")

        assert money.amount == Decimal("32.50")
        assert money.currency == "BRL"

    def test_moeda_normalizada_em_maiusculas(self):
        assert Money.create(10, "usd").currency == "USD"

    @pytest.mark.parametrize("currency", ["", "US", "REAL", "12A"])
    def test_moeda_invalida_erro(self, currency):
        """Deve exigir código de 3 letras."""
        with pytest.raises(ValidationError):
            Money.create(10, currency)

    def test_valor_negativo_erro(self):
        """Deve rejeitar valor negativo por padrão."""
        with pytest.raises(NegativeBalanceError):
            Money.create(-1)

    def test_valor_negativo_permitido_explicitamente(self):
        money = Money.create(-5, allow_negative=True)

        assert money.is_negative()

    def test_somar(self):
        total = Money.create("10.25").add(Money.create("4.75"))

        assert total.amount == Decimal("15.00")

    def test_somar_moedas_diferentes_erro(self):
        """Deve rejeitar operação entre moedas diferentes."""
        with pytest.raises(CurrencyMismatchError):
            Money.create(10, "BRL").add(Money.create(10, "USD"))

    def test_subtrair_resultado_negativo_erro(self):
        with pytest.raises(NegativeBalanceError):
            Money.create(10).subtract(Money.create(20))

    def test_subtrair_resultado_negativo_permitido(self):
        result = Money.create(10).subtract(Money.create(20), allow_negative=True)

        assert result.amount == Decimal("-10")

    def test_multiplicar(self):
        assert Money.create("32.50").multiply(100).amount == Decimal("3250.00")

    def test_multiplicar_fator_negativo_erro(self):
        with pytest.raises(ValidationError):
            Money.create(10).multiply(-2)

    @pytest.mark.parametrize("divisor", [0, -1])
    def test_dividir_divisor_invalido_erro(self, divisor):
        with pytest.raises(ValidationError):
            Money.create(10).divide(divisor)

    def test_arredondar_half_up(self):
        assert Money.create("10.005").rounded().amount == Decimal("10.01")

    def test_comparacoes(self):
        assert Money.create(20).is_greater_than(Money.create(10))
        assert Money.create(5).is_less_than(Money.create(10))
        assert Money.zero().is_zero()

    def test_str(self):
        assert str(Money.create(10)) == "BRL 10.00"

    def test_imutavel(self):
        """Operações devem retornar nova instância."""
        original = Money.create(10)
        original.add(Money.create(5))

        assert original.amount == Decimal("10")


class TestQuantity:
    """Testes para Quantity."""

    def test_aceita_fracao(self):
        assert Quantity.create("0.005").value == Decimal("0.005")

    def test_negativa_erro(self):
        with pytest.raises(ValidationError):
            Quantity.create(-1)

    def test_subtrair(self):
        assert Quantity(10).subtract(Quantity(4)).value == Decimal("6")

    def test_subtrair_acima_do_disponivel_erro(self):
        """Deve rejeitar subtração que deixaria quantidade negativa."""
        with pytest.raises(InsufficientQuantityError):
            Quantity(3).subtract(Quantity(5))

    def test_zero(self):
        assert Quantity.zero().is_zero()
        assert Quantity(2).is_greater_than(Quantity(1))

    def test_multiplicar(self):
        assert Quantity(4).multiply("2.5").value == Decimal("10")

    def test_multiplicar_por_negativo_erro(self):
        with pytest.raises(ValidationError):
            Quantity(4).multiply(-1)


class TestPercentage:
    """Testes para Percentage."""

    def test_igualdade_tolerante(self):
        """Deve considerar iguais valores a menos de 0.001."""
        assert Percentage(10.0) == Percentage(10.0005)
        assert Percentage(10.0) != Percentage(10.01)
        assert Percentage.create(10.0009) == Percentage.create(10.001)
        assert Percentage.create(10.01) != Percentage.create(10.001)

    def test_from_decimal(self):
        assert Percentage.from_decimal(0.15) == Percentage(15)
        assert Percentage.from_decimal("0.15").get_decimal() == pytest.approx(0.15)

    def test_sinal(self):
        assert Percentage(1).is_positive()
        assert Percentage(-1).is_negative()
        assert not Percentage.zero().is_positive()

    def test_str(self):
        assert str(Percentage(12.346)) == "12.35%"


class TestCPF:
    """Testes para CPF."""

    @pytest.mark.parametrize("raw", ["529.982.247-25", "52998224725", "111.444.777-35", "12345678909"])
    def test_cpf_valido(self, raw):
        cpf = CPF.create(raw)

        assert len(cpf.value) == 11
        assert cpf.value.isdigit()

    @pytest.mark.parametrize("raw", ["111.111.111-11", "123.456.789-00", "1234567890", "", "abc"])
    def test_cpf_invalido_erro(self, raw):
        """Deve rejeitar CPF malformado ou com dígito verificador errado."""
        with pytest.raises(InvalidCPFError):
            CPF.create(raw)

    def test_is_valid(self):
        assert CPF.is_valid("529.982.247-25")
        assert not CPF.is_valid("529.982.247-26")

    def test_formatado(self):
        assert CPF("52998224725").formatted == "529.982.247-25"

    def test_digito_verificador(self):
        digits = [5, 2, 9, 9, 8, 2, 2, 4, 7]

        assert CPF.calculate_verifier_digit(digits, 10) == 2
        assert CPF.calculate_verifier_digit(digits + [2], 11) == 5


class TestDateOfBirth:
    """Testes para DateOfBirth."""

    def test_maior_de_idade(self):
        birth = DateOfBirth.create(date(2008, 6, 1), today=date(2026, 6, 1))

        assert birth.age(today=date(2026, 6, 1)) == 18

    def test_menor_de_idade_erro(self):
        """Deve rejeitar quem ainda não completou 18 anos."""
        with pytest.raises(InvalidDateOfBirthError):
            DateOfBirth.create(date(2008, 6, 1), today=date(2026, 5, 31))

    def test_data_futura_erro(self):
        with pytest.raises(InvalidDateOfBirthError):
            DateOfBirth.create(date(2030, 1, 1), today=date(2026, 1, 1))

    def test_idade_pelo_calendario(self):
        assert DateOfBirth.calculate_age(date(1990, 12, 31), date(2026, 12, 30)) == 35
        assert DateOfBirth.calculate_age(date(1990, 12, 31), date(2026, 12, 31)) == 36

    def test_is_valid(self):
        assert DateOfBirth.is_valid(date(1990, 1, 1))
        assert not DateOfBirth.is_valid(date.today())


class TestCadastro:
    """Testes para Name, Email e Password."""

    def test_nome_com_acentos(self):
        assert Name.create("  José Antônio  ").value == "José Antônio"

    @pytest.mark.parametrize("value", ["A", "", "Maria1", "Ana_Paula", "Ana\nMaria", "Ana\tMaria"])
    def test_nome_invalido_erro(self, value):
        with pytest.raises(ValidationError):
            Name.create(value)

    def test_email_valido(self):
        assert Email.create("maria@exemplo.com").value == "maria@exemplo.com"

    @pytest.mark.parametrize("value", ["maria", "maria@", "maria@exemplo", "ma ria@x.com"])
    def test_email_invalido_erro(self, value):
        with pytest.raises(ValidationError):
            Email.create(value)

    def test_senha_forte(self):
        assert Password.create("Senha@123").get_value() == "Senha@123"

    @pytest.mark.parametrize("value", ["", "Ab@1", "senha@123", "Senha123"])
    def test_senha_fraca_erro(self, value):
        """Deve exigir tamanho mínimo, maiúscula e símbolo."""
        with pytest.raises(ValidationError) as exc_info:
            Password.create(value)

        assert exc_info.value.field == "password"

    def test_senha_nao_aparece_no_repr(self):
        assert "Senha" not in repr(Password.create("Senha@123"))


class TestPeriod:

    @pytest.mark.parametrize("value", ["1M", "3M", "6M", "1Y", "3Y", "5Y", "YTD"])
    def test_periodo_valido(self, value):
        assert Period.create(value).value == value

    def test_periodo_invalido_erro(self):
        with pytest.raises(InvalidPeriodError):
            Period.create("2Y")


class TestPaginationParams:

    def test_offset_e_slice(self):
        params = PaginationParams(page=2, per_page=3)

        assert params.offset == 3
        assert params.slice(list(range(10))) == [3, 4, 5]

    def test_pagina_alem_do_fim(self):
        assert PaginationParams(page=5, per_page=20).slice([1, 2]) == []

    @pytest.mark.parametrize("page,per_page", [(0, 20), (1, 0)])
    def test_parametros_invalidos_erro(self, page, per_page):
        with pytest.raises(ValidationError):
            PaginationParams(page=page, per_page=per_page)
