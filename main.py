import logging
import os
import sys

from rich.logging import RichHandler
from rich.pretty import pprint

from argosy import *


def build():
    engine = Engine("argosy-demo", "argosy demonstration tool")

    engine.add_subcommand("sub1", "first subcommand") \
        .add_flag(("flag1", "f1"), "subcommand flag")
    engine.add_subcommand("sub2", "second subcommand")

    engine.add_flag(("flag1", "f1"), "first flag") \
        .add_flag(("flag2", "f2"), "second flag") \
        .add_optional_argument(("option", "o"), "optional value") \
        .add_mandatory_argument(("mandatory", "m"), "mandatory value") \
        .add_positional("pos1", "first positional") \
        .add_positional("pos2", "second positional")

    return engine


if __name__ == '__main__':
    if os.environ.get("ARGOSY_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])

    engine = build()
    try:
        engine.parse()
    except ParseException as fault:
        report(fault)
        sys.exit(1)
    pprint(engine)
