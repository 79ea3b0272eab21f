from rich import print
from rich.pretty import pprint

from switchboard import *


class Args:
    some_str = SwitchSpec("--some-str/-s", "This is a switch, for an arg", "on_some_str", 1, String)
    only_short = SwitchSpec("-b", "This is a test for only shorthand switches", "on_only_short")
    only_long = SwitchSpec("--bool-value", "This is a test for only longhand switches", "on_only_long")
    type_test = SwitchSpec("--type-test/-T", "This is a type conversion test", "on_type_test", 2, Int32Array)
    array_test = SwitchSpec("--arr-test/-a", "A test on array types", "on_array_test", 3, list[int])

    @staticmethod
    def on_some_str(value):
        print("[bold]some-str[/]:", value)

    @staticmethod
    def on_only_short():
        print("[bold]-b[/] was given")

    @staticmethod
    def on_only_long():
        print("[bold]--bool-value[/] was given")

    @staticmethod
    def on_type_test(values):
        print("[bold]type-test[/]:", ", ".join(map(str, values)))

    @staticmethod
    def on_array_test(values):
        print("[bold]arr-test[/]:", ", ".join(map(str, values)))


if __name__ == '__main__':
    residual = process_arguments(Args, settings=Settings(usage="Usage: <args> <search path>"))
    pprint(residual)
