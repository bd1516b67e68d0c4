"""Command-line interface for nbe-lang."""

import sys
import time
from typing import Optional

import click

from nbe_lang import __version__
from nbe_lang.prelude import EXAMPLES


@click.command()
@click.argument('example', required=False, default='arithmetic', type=click.Choice(sorted(EXAMPLES)))
@click.option('--pretty/--no-pretty', 'show_pretty', default=True, help='Print the term')
@click.option('--normalize/--no-normalize', 'show_normal', default=True, help='Print the normal form')
@click.option('--check/--no-check', 'run_check', default=True, help='Type check against the expected type')
@click.option('--list', 'list_examples', is_flag=True, help='List the available examples')
@click.option('--verbose', '-v', is_flag=True, help='Show the type derivation trace on errors')
@click.option('--timing', is_flag=True, help='Show timing information')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--output', '-o', type=click.Path(), help='Write the normal form to a file')
@click.option('--version', is_flag=True, help='Show version information')
def main(example: str = 'arithmetic',
         show_pretty: bool = True,
         show_normal: bool = True,
         run_check: bool = True,
         list_examples: bool = False,
         verbose: bool = False,
         timing: bool = False,
         no_color: bool = False,
         output: Optional[str] = None,
         version: bool = False) -> None:
    """nbe-lang - a small dependently-typed core.

    Pretty-prints, type checks and normalizes one of the built-in
    EXAMPLEs (default: arithmetic).

    Examples:

      nbe-lang                       # plus 2 (mult 8 5)

      nbe-lang cong --no-normalize   # Check the congruence lemma

      nbe-lang ill-typed -v          # Show a type error with its trace
    """
    from nbe_lang.colors import Colors, make_console
    from nbe_lang.core import Environment
    from nbe_lang.evaluator import evaluate
    from nbe_lang.quote import normalize
    from nbe_lang.pretty import pretty
    from nbe_lang.typechecker import Context, check
    from nbe_lang.errors import TypeCheckError, EvalError, enable_trace, disable_trace, clear_trace

    console = make_console(color=not no_color)
    err_console = make_console(color=not no_color, stderr=True)

    if version:
        console.print(f"nbe-lang version {__version__}")
        console.print("A small dependently-typed core")
        sys.exit(0)

    if list_examples:
        for name in sorted(EXAMPLES):
            console.print(f"{Colors.bold(name)}  {Colors.dim(EXAMPLES[name].description)}")
        return

    selected = EXAMPLES[example]
    start_time = time.time()

    try:
        if show_pretty:
            console.print(Colors.bold("-- pretty --"))
            console.print(Colors.term(pretty(0, selected.term)))
            console.print()

        if run_check:
            if verbose:
                clear_trace()
                enable_trace()
            check_start = time.time()
            console.print(Colors.bold("-- typecheck --"))
            expected = evaluate(Environment(), selected.expected_type)
            check(Environment(), Context(), selected.term, expected)
            console.print(Colors.success("OK"))
            console.print()
            if timing:
                console.print(Colors.dim(f"Type check time: {time.time() - check_start:.3f}s"))

        if show_normal:
            normal_start = time.time()
            normal_form = pretty(0, normalize(Environment(), selected.term))
            console.print(Colors.bold("-- normalized --"))
            console.print(Colors.term(normal_form))
            if output:
                with open(output, 'w', encoding='utf-8') as f:
                    f.write(normal_form + '\n')
                console.print(Colors.info(f"Normal form written to {output}"))
            if timing:
                console.print(Colors.dim(f"Normalize time: {time.time() - normal_start:.3f}s"))

        if timing:
            console.print(Colors.dim(f"Total time: {time.time() - start_time:.3f}s"))

    except TypeCheckError as e:
        err_console.print(e.format_error())
        sys.exit(1)
    except EvalError as e:
        # Invariant violation: only reachable with --no-check
        err_console.print(Colors.error(f"Internal error: {e}"))
        sys.exit(2)
    except RecursionError:
        err_console.print(Colors.error("Internal error: evaluation nested too deeply"))
        sys.exit(2)
    finally:
        if verbose:
            disable_trace()
            clear_trace()


if __name__ == "__main__":
    main()
