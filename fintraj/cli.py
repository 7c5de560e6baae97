"""
Command-Line Interface for FinTraj.

Purpose
-------
Run projections, what-if presets, goal trajectories and comparisons from
the shell, without writing Python code.

Commands
--------
- simulate: Project one set of assumptions (or every simulation of a profile)
- goal: Project a savings goal
- compare: Rank several projections against a baseline
- presets: List the named crisis presets
- health: Score a snapshot of current line items
- config: Validate or create profile files

Example Usage
-------------
    # Ten-year projection with a job loss in year 2
    $ fintraj simulate --monthly-income 3000 --monthly-expenses 2200 --preset job_loss

    # Run every simulation of a profile and save the results
    $ fintraj simulate --profile profile.json --output runs/profile.json

    # Compare the five default strategies
    $ fintraj compare --monthly-income 3000 --monthly-expenses 2200 --savings 8000

    # Validate a profile
    $ fintraj config validate profile.json
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .comparison import compare as compare_results
from .comparison import default_comparisons
from .config import AppSettings, ProfileConfig, SeedConfig
from .constants import (
    DEFAULT_EXPENSE_REDUCTION,
    DEFAULT_INCOME_GROWTH,
    DEFAULT_INFLATION_RATE,
    DEFAULT_INVESTMENT_RETURN,
    DEFAULT_SAVINGS_RATE,
    DEFAULT_YEARS,
)
from .exceptions import FinTrajError
from .goals import DEFAULT_GOALS, goal_progress, project_goal
from .health import assess_health
from .model import METRICS, ScenarioComparison, SimulationResult, SimulationType
from .scenario import PRESETS, get_preset, preset_table, run_preset, run_simulation
from .serialization import (
    SCHEMA_VERSION,
    load_profile,
    load_snapshot,
    save_goal_result,
    save_result,
    save_results,
)
from .utils import format_currency
from .validation import validate_goal

from . import __version__

logger = logging.getLogger(__name__)

SHOCK_KEYS = sorted(k for k, p in PRESETS.items() if p.shock_factory is not None)


def _configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.captureWarnings(True)


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------

def _result_table(result: SimulationResult, symbol: str, real: bool = False) -> Table:
    title = result.name + (" (inflation-adjusted)" if real else "")
    table = Table(title=title, show_header=True)
    table.add_column("Year", style="cyan")
    for label in ("Income", "Expenses", "Savings", "Net worth"):
        table.add_column(label, justify="right")

    columns = [result.real_values(m) if real else result.series(m) for m in METRICS]
    for i, year in enumerate(result.years):
        table.add_row(str(year), *(format_currency(col[i], symbol=symbol) for col in columns))
    return table


def _comparison_table(rows, symbol: str, metric: str) -> Table:
    table = Table(title=f"Comparison ({metric})", show_header=True)
    table.add_column("Rank", justify="right")
    table.add_column("Scenario", style="cyan")
    table.add_column("Initial", justify="right")
    table.add_column("Final", justify="right", style="green")
    table.add_column("Growth", justify="right")
    table.add_column("vs baseline", justify="right")
    table.add_column("vs baseline %", justify="right")

    for row in sorted(rows, key=lambda r: r.rank):
        shown = row.as_dict()
        delta = row.delta_from_baseline
        table.add_row(
            str(row.rank),
            row.name + (" *" if row.is_baseline else ""),
            format_currency(row.initial_value, symbol=symbol),
            format_currency(row.final_value, symbol=symbol),
            _pct(shown["growth_pct"]),
            format_currency(delta, symbol=symbol),
            _pct(shown["delta_pct"]),
        )
    return table


def _pct(value) -> str:
    return value if isinstance(value, str) else f"{value:+d}%"


def _print_comparison(ctx: click.Context, items, baseline: Optional[str], metric: str) -> None:
    console = ctx.obj["console"]
    symbol = ctx.obj["settings"].currency_symbol
    rows = compare_results(items, baseline_name=baseline, metric=metric)
    if ctx.obj["quiet"]:
        for row in rows:
            d = row.as_dict()
            click.echo(
                f"{row.rank}. {row.name}: {format_currency(row.final_value, symbol=symbol)} "
                f"(growth {_pct(d['growth_pct'])}, vs baseline {_pct(d['delta_pct'])})"
            )
    else:
        console.print(_comparison_table(rows, symbol, metric))


def _seed_from_options(monthly_income, monthly_expenses, savings, net_worth) -> SeedConfig:
    return SeedConfig(
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        savings=savings,
        net_worth=net_worth,
    )


def _seed_options(func):
    """Shared options describing the user's current position."""
    options = [
        click.option("--monthly-income", type=float, default=0.0, show_default=True,
                     help="Current monthly income"),
        click.option("--monthly-expenses", type=float, default=0.0, show_default=True,
                     help="Current monthly expenses"),
        click.option("--savings", type=float, default=0.0, show_default=True,
                     help="Current savings balance"),
        click.option("--net-worth", type=float, default=None,
                     help="Current net worth (default: savings)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(version=__version__, prog_name="fintraj")
@click.option("--quiet", "-q", is_flag=True, help="Print plain summaries instead of tables")
@click.pass_context
def main(ctx: click.Context, quiet: bool) -> None:
    """
    FinTraj - Personal-finance trajectory projections.

    Project income, expenses, savings and net worth year by year, try
    what-if scenarios and track savings goals.

    Use 'fintraj COMMAND --help' for command-specific help.
    """
    settings = AppSettings()
    _configure_logging(settings)
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = Console()
    ctx.obj["settings"] = settings


# ---------------------------------------------------------------------------
# simulate
# ---------------------------------------------------------------------------

@main.command()
@click.option("--profile", "-p", type=click.Path(exists=True, path_type=Path), default=None,
              help="Profile file (JSON) with a seed and simulations")
@click.option("--name", "-n", default="Simulation", help="Simulation label")
@click.option("--years", "-y", type=int, default=DEFAULT_YEARS, show_default=True,
              help="Projection horizon in years")
@click.option("--income-growth", type=float, default=DEFAULT_INCOME_GROWTH, show_default=True,
              help="Annual income growth (%)")
@click.option("--expense-reduction", type=float, default=DEFAULT_EXPENSE_REDUCTION,
              show_default=True, help="Annual expense reduction (%)")
@click.option("--savings-rate", type=float, default=DEFAULT_SAVINGS_RATE, show_default=True,
              help="Share of the yearly surplus saved (%)")
@click.option("--investment-return", type=float, default=DEFAULT_INVESTMENT_RETURN,
              show_default=True, help="Annual return on net worth (%)")
@click.option("--inflation", type=float, default=DEFAULT_INFLATION_RATE, show_default=True,
              help="Annual inflation (%)")
@click.option("--type", "simulation_type", type=click.Choice([t.value for t in SimulationType]),
              default=SimulationType.NORMAL.value, show_default=True, help="Scenario transform")
@_seed_options
@click.option("--preset", type=click.Choice(sorted(PRESETS)), default=None,
              help="Named what-if preset (overrides --type)")
@click.option("--shock", type=click.Choice(SHOCK_KEYS), default=None,
              help="Crisis shock applied after projection")
@click.option("--start-year", type=int, default=None,
              help="Calendar year of index 0 (default: current year)")
@click.option("--real", is_flag=True, help="Show inflation-adjusted values")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None,
              help="Save results to this JSON file")
@click.pass_context
def simulate(
    ctx: click.Context,
    profile: Optional[Path],
    name: str,
    years: int,
    income_growth: float,
    expense_reduction: float,
    savings_rate: float,
    investment_return: float,
    inflation: float,
    simulation_type: str,
    monthly_income: float,
    monthly_expenses: float,
    savings: float,
    net_worth: Optional[float],
    preset: Optional[str],
    shock: Optional[str],
    start_year: Optional[int],
    real: bool,
    output: Optional[Path],
) -> None:
    """
    Run a projection.

    Without --profile, assumptions come from the options. With --preset,
    both the unshocked baseline and the preset scenario are shown.

    Example:
        fintraj simulate --monthly-income 3000 --monthly-expenses 2000 -y 5
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    settings: AppSettings = ctx.obj["settings"]
    start_year = start_year if start_year is not None else settings.start_year

    try:
        if profile is not None:
            cfg = load_profile(profile)
            seed_cfg = cfg.seed
            raw_list: List = list(cfg.simulations)
            baseline_name = cfg.baseline
            if not raw_list:
                _fail(f"profile {profile} defines no simulations")
        else:
            seed_cfg = _seed_from_options(
                monthly_income, monthly_expenses, savings,
                savings if net_worth is None else net_worth,
            )
            raw_list = [{
                "name": name,
                "years": years,
                "income_growth": income_growth,
                "expense_reduction": expense_reduction,
                "savings_rate": savings_rate,
                "investment_return": investment_return,
                "inflation_rate": inflation,
                "simulation_type": simulation_type,
            }]
            baseline_name = None

        seed = seed_cfg.to_seed()
        items: List = []
        if preset is not None:
            if shock is not None:
                _fail("--shock cannot be combined with --preset (the preset brings its own shock)")
            if len(raw_list) > 1:
                click.echo(
                    f"Warning: --preset runs only the first simulation of the profile, "
                    f"skipping {len(raw_list) - 1} other(s)",
                    err=True,
                )
            baseline, scenario = run_preset(
                preset,
                raw_list[0],
                seed,
                monthly_income=seed_cfg.monthly_income,
                monthly_expenses=seed_cfg.monthly_expenses,
                start_year=start_year,
            )
            info = get_preset(preset)
            items = [
                ScenarioComparison("Baseline", "Preset assumptions without the shock",
                                   baseline.params, baseline),
                ScenarioComparison(info.name, info.description, scenario.params, scenario),
            ]
            baseline_name = "Baseline"
            results = [baseline, scenario]
        else:
            shock_spec = None
            if shock is not None:
                shock_spec = get_preset(shock).shock(
                    seed_cfg.monthly_income, seed_cfg.monthly_expenses
                )
            results = [
                run_simulation(raw, seed, shock=shock_spec, start_year=start_year)
                for raw in raw_list
            ]
            items = list(results)
    except FinTrajError as e:
        _fail(str(e))

    symbol = settings.currency_symbol
    for item, result in zip(items, results):
        if quiet:
            label = item.name if isinstance(item, ScenarioComparison) else result.name
            click.echo(f"{label}: final net worth {format_currency(result.final(), symbol=symbol)}")
        else:
            table = _result_table(result, symbol, real=real)
            if isinstance(item, ScenarioComparison):
                table.title = item.name + (" (inflation-adjusted)" if real else "")
            console.print(table)

    if len(results) > 1:
        _print_comparison(ctx, items, baseline_name, "net_worth")

    if output is not None:
        if len(results) == 1:
            save_result(results[0], output)
        else:
            save_results(results, output)
        if not quiet:
            console.print(f"[green]Results saved to {output}[/green]")
        logger.info("saved %d result(s) to %s", len(results), output)


# ---------------------------------------------------------------------------
# goal
# ---------------------------------------------------------------------------

@main.command()
@click.option("--profile", "-p", type=click.Path(exists=True, path_type=Path), default=None,
              help="Profile file (JSON); its goals are projected")
@click.option("--target", "-t", type=float, default=None, help="Target amount")
@click.option("--current", type=float, default=0.0, show_default=True, help="Amount saved so far")
@click.option("--monthly", "-m", type=float, default=0.0, show_default=True,
              help="Monthly contribution")
@click.option("--interest", type=float, default=0.0, show_default=True,
              help="Annual interest rate (%)")
@click.option("--inflation", type=float, default=0.0, show_default=True,
              help="Annual inflation (%)")
@click.option("--years", "-y", type=int, default=DEFAULT_YEARS, show_default=True,
              help="Horizon in years")
@click.option("--name", default="Goal", help="Goal label")
@click.option("--defaults", is_flag=True, help="Project the built-in example goals")
@click.option("--start-year", type=int, default=None,
              help="Calendar year of index 0 (default: current year)")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None,
              help="Save the trajectory to this JSON file (single goal only)")
@click.pass_context
def goal(
    ctx: click.Context,
    profile: Optional[Path],
    target: Optional[float],
    current: float,
    monthly: float,
    interest: float,
    inflation: float,
    years: int,
    name: str,
    defaults: bool,
    start_year: Optional[int],
    output: Optional[Path],
) -> None:
    """
    Project a savings goal with yearly compounding.

    Example:
        fintraj goal --target 10000 --current 2000 --monthly 300 --interest 1 -y 3
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    settings: AppSettings = ctx.obj["settings"]
    symbol = settings.currency_symbol
    start_year = start_year if start_year is not None else settings.start_year

    if profile is not None:
        try:
            definitions = [validate_goal(g) for g in load_profile(profile).goals]
        except FinTrajError as e:
            _fail(str(e))
        if not definitions:
            _fail(f"profile {profile} defines no goals")
    elif defaults:
        definitions = list(DEFAULT_GOALS)
    elif target is None:
        _fail("--target is required unless --defaults or --profile is given")
    else:
        try:
            definitions = [validate_goal({
                "name": name,
                "target_amount": target,
                "current_amount": current,
                "monthly_contribution": monthly,
                "interest_rate": interest,
                "inflation_rate": inflation,
                "years": years,
            })]
        except FinTrajError as e:
            _fail(str(e))

    for definition in definitions:
        result = project_goal(definition, start_year=start_year)
        progress = goal_progress(definition, result)
        remaining = (
            "never (no contribution)" if progress.years_remaining is None
            else f"{progress.years_remaining} year(s)"
        )
        earnings = (
            f"contributed {format_currency(progress.total_contributed, symbol=symbol)}, "
            f"interest {format_currency(progress.interest_earned, symbol=symbol)}"
        )
        if quiet:
            click.echo(
                f"{definition.name}: {format_currency(result.final_amount, symbol=symbol)} "
                f"of {format_currency(definition.target_amount, symbol=symbol)}, "
                f"remaining {remaining}, {earnings}"
            )
            continue
        table = Table(title=definition.name, show_header=True)
        table.add_column("Year", style="cyan")
        table.add_column("Amount", justify="right", style="green")
        table.add_column("Inflation-adjusted", justify="right")
        for year, amount, adjusted in zip(result.years, result.amounts, result.adjusted_for_inflation):
            table.add_row(
                str(year),
                format_currency(amount, symbol=symbol),
                format_currency(adjusted, symbol=symbol),
            )
        console.print(table)
        status = "[green]reached[/green]" if progress.reached else "[yellow]not reached[/yellow]"
        console.print(
            f"Target {format_currency(definition.target_amount, symbol=symbol)}: {status}; "
            f"years remaining at this pace: {remaining}"
        )
        console.print(
            f"Total contributed: {format_currency(progress.total_contributed, symbol=symbol)}; "
            f"interest earned: {format_currency(progress.interest_earned, symbol=symbol)}"
        )

    if output is not None and len(definitions) == 1:
        save_goal_result(result, output, name=definitions[0].name)


# ---------------------------------------------------------------------------
# compare
# ---------------------------------------------------------------------------

@main.command()
@click.option("--profile", "-p", type=click.Path(exists=True, path_type=Path), default=None,
              help="Profile file (JSON); its simulations are compared")
@_seed_options
@click.option("--years", "-y", type=int, default=DEFAULT_YEARS, show_default=True,
              help="Horizon of the default strategies")
@click.option("--baseline", "-b", default=None,
              help="Baseline scenario name (default: profile baseline or 'Current situation')")
@click.option("--metric", type=click.Choice(list(METRICS)), default="net_worth", show_default=True)
@click.option("--start-year", type=int, default=None)
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None,
              help="Save compared results to this JSON file")
@click.pass_context
def compare(
    ctx: click.Context,
    profile: Optional[Path],
    monthly_income: float,
    monthly_expenses: float,
    savings: float,
    net_worth: Optional[float],
    years: int,
    baseline: Optional[str],
    metric: str,
    start_year: Optional[int],
    output: Optional[Path],
) -> None:
    """
    Compare projections side by side.

    Without --profile, the five default strategies (current situation,
    expense reduction, income increase, optimized investments, combined)
    are projected from the given current position.

    Example:
        fintraj compare --monthly-income 3000 --monthly-expenses 2200 --savings 8000
    """
    settings: AppSettings = ctx.obj["settings"]
    start_year = start_year if start_year is not None else settings.start_year

    try:
        if profile is not None:
            cfg: ProfileConfig = load_profile(profile)
            seed = cfg.seed.to_seed()
            items: Sequence = [
                run_simulation(raw, seed, start_year=start_year) for raw in cfg.simulations
            ]
            baseline = baseline or cfg.baseline
        else:
            seed_cfg = _seed_from_options(
                monthly_income, monthly_expenses, savings,
                savings if net_worth is None else net_worth,
            )
            items = default_comparisons(
                seed_cfg.to_seed(),
                seed_cfg.savings_rate(),
                years=years,
                start_year=start_year,
            )
            baseline = baseline or items[0].name
    except FinTrajError as e:
        _fail(str(e))

    if not items:
        _fail("nothing to compare")
    _print_comparison(ctx, items, baseline, metric)

    if output is not None:
        results = [i.result if isinstance(i, ScenarioComparison) else i for i in items]
        save_results(results, output)


# ---------------------------------------------------------------------------
# presets
# ---------------------------------------------------------------------------

@main.command()
@click.pass_context
def presets(ctx: click.Context) -> None:
    """List the named what-if presets usable with 'simulate --preset'."""
    rows = preset_table()
    if ctx.obj["quiet"]:
        for row in rows:
            click.echo(f"{row['key']}: {row['description']}")
        return
    table = Table(title="Scenario presets", show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Description")
    for row in rows:
        table.add_row(row["key"], row["name"], row["type"], row["description"])
    ctx.obj["console"].print(table)


# ---------------------------------------------------------------------------
# health
# ---------------------------------------------------------------------------

@main.command()
@click.argument("snapshot_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def health(ctx: click.Context, snapshot_file: Path) -> None:
    """
    Score current finances out of 100.

    SNAPSHOT_FILE is a JSON object with incomes, expenses, savings,
    investments and debts line items.
    """
    try:
        snapshot = load_snapshot(snapshot_file)
    except FinTrajError as e:
        _fail(str(e))

    report = assess_health(snapshot)
    if ctx.obj["quiet"]:
        click.echo(f"score: {report.score}/100 ({report.status})")
        return
    body = (
        f"[bold]Score: {report.score}/100[/bold] ({report.status})\n\n"
        f"Savings rate: {report.savings_rate:.0f}%\n"
        f"Strengths: {', '.join(report.strengths) or '-'}\n"
        f"Weaknesses: {', '.join(report.weaknesses) or '-'}\n"
        f"Recommendations: {', '.join(report.recommendations) or '-'}"
    )
    ctx.obj["console"].print(Panel(body, title="Financial health"))


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

@main.group()
def config() -> None:
    """Profile file utilities."""
    pass


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def config_validate(ctx: click.Context, config_file: Path) -> None:
    """
    Validate a profile file.

    Example:
        fintraj config validate profile.json
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    symbol = ctx.obj["settings"].currency_symbol

    try:
        cfg = load_profile(config_file)
    except FinTrajError as e:
        click.echo(f"Configuration validation failed: {e}", err=True)
        sys.exit(1)

    if quiet:
        click.echo("Configuration is valid")
        click.echo(f"Simulations: {len(cfg.simulations)}")
        return

    info = (
        "[bold]Profile Valid[/bold]\n\n"
        f"[cyan]Seed:[/cyan] income {format_currency(cfg.seed.monthly_income, symbol=symbol)}/month, "
        f"expenses {format_currency(cfg.seed.monthly_expenses, symbol=symbol)}/month\n"
        f"[cyan]Simulations ({len(cfg.simulations)}):[/cyan]\n"
    )
    for sim in cfg.simulations:
        info += f"  - {sim.name}: {sim.years} years, {sim.simulation_type.value}\n"
    info += f"[cyan]Goals:[/cyan] {len(cfg.goals)}\n"
    info += f"[cyan]Baseline:[/cyan] {cfg.baseline or '-'}"
    console.print(Panel(info, title="Configuration Summary", border_style="green"))


@config.command("create")
@click.argument("output_file", type=click.Path(path_type=Path))
@click.pass_context
def config_create(ctx: click.Context, output_file: Path) -> None:
    """
    Write a starter profile that can be customized.

    Example:
        fintraj config create my_profile.json
    """
    config_data = {
        "schema_version": SCHEMA_VERSION,
        "seed": {"monthly_income": 3000, "monthly_expenses": 2200, "savings": 8000, "net_worth": 8000},
        "simulations": [
            {"name": "Base", "years": DEFAULT_YEARS, "income_growth": DEFAULT_INCOME_GROWTH,
             "expense_reduction": DEFAULT_EXPENSE_REDUCTION, "savings_rate": DEFAULT_SAVINGS_RATE,
             "investment_return": DEFAULT_INVESTMENT_RETURN, "inflation_rate": DEFAULT_INFLATION_RATE},
            {"name": "Optimistic", "years": DEFAULT_YEARS, "income_growth": DEFAULT_INCOME_GROWTH,
             "expense_reduction": DEFAULT_EXPENSE_REDUCTION, "savings_rate": DEFAULT_SAVINGS_RATE,
             "investment_return": DEFAULT_INVESTMENT_RETURN, "inflation_rate": DEFAULT_INFLATION_RATE,
             "simulation_type": "optimistic"},
        ],
        "goals": [
            {"name": g.name, "target_amount": g.target_amount, "current_amount": g.current_amount,
             "monthly_contribution": g.monthly_contribution, "interest_rate": g.interest_rate,
             "inflation_rate": g.inflation_rate, "years": g.years}
            for g in DEFAULT_GOALS
        ],
        "baseline": "Base",
    }

    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w") as f:
        json.dump(config_data, f, indent=2)

    if not ctx.obj["quiet"]:
        ctx.obj["console"].print(f"[green]Created profile: {output_file}[/green]")


if __name__ == "__main__":
    main()
