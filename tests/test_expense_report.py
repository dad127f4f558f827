import importlib.util
from pathlib import Path

import pytest

from expense_calculator.aggregation import Weekday

SCRIPT_PATH = Path(__file__).resolve().parents[1] / 'scripts' / 'expense_report.py'


def _load_script_module():
    spec = importlib.util.spec_from_file_location('expense_report_test', SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_flat_report(capsys):
    module = _load_script_module()
    code = module.main([
        '--start', '2024-01-01', '--end', '2024-01-07',
        '--workday', '100', '--weekend', '50', '--currency', 'FCFA',
    ])
    out = capsys.readouterr().out

    assert code == 0
    assert 'Dépenses du 01/01/2024 au 07/01/2024' in out
    assert 'Période: 7 jours' in out
    assert 'Semaine 1' in out
    assert out.rstrip().endswith('Total: 600 FCFA')


def test_custom_report_accepts_french_dates(capsys):
    module = _load_script_module()
    code = module.main([
        '--start', '01/02/2024', '--end', '22/02/2024',
        '--custom', 'vendredi=200', '--currency', 'EUR',
    ])
    out = capsys.readouterr().out

    assert code == 0
    assert out.rstrip().endswith('Total: 600 EUR')


@pytest.mark.parametrize(
    'argv',
    [
        ['--start', 'hier', '--end', '2024-01-07'],
        ['--start', '2024-01-07', '--end', '2024-01-01'],
        ['--start', '2024-01-01', '--end', '2024-01-07', '--custom', 'lundi'],
        ['--start', '2024-01-01', '--end', '2024-01-07', '--custom', 'funday=3'],
    ],
)
def test_invalid_arguments_exit_with_error(argv, capsys):
    module = _load_script_module()
    assert module.main(argv) == 1
    assert capsys.readouterr().out


def test_parse_custom_rates():
    module = _load_script_module()
    rates = module.parse_custom_rates(['lundi=10', 'Sunday=5,5'])
    assert rates == {Weekday.MONDAY: '10', Weekday.SUNDAY: '5,5'}


def test_report_with_huge_rate(capsys):
    module = _load_script_module()
    code = module.main([
        '--start', '2024-01-01', '--end', '2024-01-07',
        '--workday', '100000000000000000000000000', '--weekend', '0',
    ])
    out = capsys.readouterr().out

    assert code == 0
    assert out.rstrip().endswith('Total: 500 000 000 000 000 000 000 000 000 FCFA')
