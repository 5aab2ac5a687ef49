from dcf_service.cli import build_parser, main


def test_parser_options():
    args = build_parser().parse_args(["AAPL", "--wacc", "8", "--mid-year", "--net-debt=-1e9"])
    assert args.ticker == "AAPL"
    assert args.wacc == 8.0
    assert args.mid_year is True
    assert args.net_debt == -1e9
    assert args.source is None


def test_parser_plain_negative_net_debt():
    args = build_parser().parse_args(["AAPL", "--net-debt", "-2500000"])
    assert args.net_debt == -2_500_000.0


def test_cli_net_debt_override(capsys):
    exit_code = main(["MSFT", "--net-debt=-1e9"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "Equity Value:" in out


def test_cli_prints_summary(capsys):
    exit_code = main(["aapl"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "Running valuation for aapl..." in out
    assert "Intrinsic Value per Share:" in out
    assert "Sensitivity (discount rate vs terminal growth):" in out


def test_cli_fallback_company_reports_status(capsys):
    exit_code = main(["MSFT", "--source", "mock"])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "Status: UNDERVALUED" in out
    # Sample assumptions centre the grid on a 10% discount rate.
    assert "    10% " in out


def test_cli_unknown_source(capsys):
    exit_code = main(["AAPL", "--source", "nowhere"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "not found" in captured.err
