"""Define a command-line interface for grounding and executing actions in example domains."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import click
import numpy as np
from rich.table import Table

from action_grounding.domains import DOMAINS
from action_grounding.environments import EnvironmentOutcome, SimulatedEnvironment
from action_grounding.errors import GroundingError
from action_grounding.io.logging import configure_logging, console, log_info
from action_grounding.io.schemata import RunConfigSchema
from action_grounding.io.yaml_utils import export_yaml_data
from action_grounding.states import OOState
from action_grounding.translation import ObjectMatchingTranslator

domain_option = click.option(
    "--domain",
    type=click.Choice(sorted(DOMAINS)),
    default="blocks_world",
    show_default=True,
    help="Example domain providing the action schemas.",
)
state_argument = click.argument(
    "state_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


def _render_outcome(outcome: EnvironmentOutcome) -> Table:
    """Render a table summarizing the outcome of an executed action."""
    table = Table(title=f"Outcome of {outcome.action.signature}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Reward", str(outcome.reward))
    table.add_row("Terminated", str(outcome.terminated))
    table.add_row("Next state", repr(outcome.next_observation))
    return table


def _fail(err: Exception) -> NoReturn:
    """Report an error in red and exit with a nonzero status."""
    message = err.args[0] if isinstance(err, KeyError) and err.args else err
    console.print(f"[red]{message}[/]")
    raise click.exceptions.Exit(1) from err


@click.group()
@click.option("--log-level", default="INFO", show_default=True, help="Logging level.")
def cli(log_level: str) -> None:
    """Ground, execute, and translate actions in example planning domains."""
    configure_logging(log_level.upper())


@cli.command()
@state_argument
@domain_option
def ground(state_path: Path, domain: str) -> None:
    """List every grounded action applicable in the state loaded from STATE_PATH."""
    state = OOState.from_yaml(state_path)
    action_space = DOMAINS[domain]()

    table = Table(title=f"Applicable actions ({action_space.name})")
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Action", style="bold")
    table.add_column("Parameters", style="magenta")

    for idx, action in enumerate(action_space.all_applicable_grounded_actions(state), start=1):
        table.add_row(str(idx), action.name, " ".join(action.parameters_as_strings()) or "-")

    console.print(table)


@cli.command()
@state_argument
@click.argument("action_string")
@domain_option
@click.option("--seed", type=int, default=None, help="Seed for sampling stochastic outcomes.")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Optional YAML file to which the resulting state is written.",
)
def step(
    state_path: Path,
    action_string: str,
    domain: str,
    seed: int | None,
    output: Path | None,
) -> None:
    """Execute ACTION_STRING (e.g. "stack(b0, b1)") once in a simulated environment."""
    state = OOState.from_yaml(state_path)
    env = SimulatedEnvironment(state, rng=np.random.default_rng(seed))

    try:
        action = DOMAINS[domain]().parse_grounded_action(action_string)
        outcome = action.execute_in_environment(env)
    except (GroundingError, KeyError) as err:
        _fail(err)

    console.print(_render_outcome(outcome))

    if output is not None:
        export_yaml_data(outcome.next_observation.to_yaml_data(), output)
        log_info(f"Wrote the resulting state to {output}.")


@cli.command()
@state_argument
@click.argument("action_string")
@domain_option
def transitions(state_path: Path, action_string: str, domain: str) -> None:
    """Enumerate the outcomes of ACTION_STRING and their probabilities."""
    state = OOState.from_yaml(state_path)

    try:
        action = DOMAINS[domain]().parse_grounded_action(action_string)
        distribution = action.transitions(state)
    except (GroundingError, KeyError) as err:
        _fail(err)

    table = Table(title=f"Transitions of {action.signature}")
    table.add_column("Probability", justify="right", style="cyan")
    table.add_column("Next state")
    for next_state, probability in distribution:
        table.add_row(f"{probability:.3f}", repr(next_state))

    console.print(table)


@cli.command()
@click.argument("source_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("target_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("action_string")
@domain_option
@click.option("--subset", is_flag=True, help="Allow the target state to contain extra objects.")
def translate(
    source_path: Path,
    target_path: Path,
    action_string: str,
    domain: str,
    subset: bool,
) -> None:
    """Translate ACTION_STRING from the source state's objects to the target state's objects."""
    source = OOState.from_yaml(source_path)
    target = OOState.from_yaml(target_path)

    try:
        action = DOMAINS[domain]().parse_grounded_action(action_string)
        translated = action.translate(source, target, ObjectMatchingTranslator(not subset))
    except (GroundingError, KeyError) as err:
        _fail(err)

    console.print(f"{action.signature} -> [bold green]{translated.signature}[/]")


@cli.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def run(config_path: Path) -> None:
    """Execute the sequence of actions specified by the run config at CONFIG_PATH."""
    config = RunConfigSchema.validate_yaml(config_path)
    configure_logging(config.log_level)

    if config.domain not in DOMAINS:
        raise click.BadParameter(f"Unknown domain: '{config.domain}'.", param_hint="domain")

    action_space = DOMAINS[config.domain]()
    env = SimulatedEnvironment(
        OOState.from_yaml(config.state),
        rng=np.random.default_rng(config.seed),
    )

    for action_string in config.actions:
        try:
            action = action_space.parse_grounded_action(action_string)
            outcome = action.execute_in_environment(env)
        except (GroundingError, KeyError) as err:
            _fail(err)

        console.print(_render_outcome(outcome))
        if outcome.terminated:
            break
