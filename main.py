from rich.pretty import pprint

from flargs import *

__prog__ = "aaa"

schema = Command(
    "aaa",
    "desc",
    version="1.2.3",
    flags=[
        Flag("flag"),
        Flag("opt", "0", type="number", default=2),
    ],
    commands=[
        Command("bbb", params=[Param("path", array=True)]),
        Command(
            "ccc",
            params=[Param("port", type="number")],
            flags=[Flag("cfl", "l")],
            commands=[
                Command(
                    "ccc-aaa",
                    aliases=["ca"],
                    flags=[
                        Flag("xxx", "x", type="boolean"),
                        Flag("yyy", "y", type="number", array=True),
                        Flag("opt", "0", type="number", default=1),
                        Flag("zzz", "z"),
                    ],
                ),
            ],
        ),
    ],
)


if __name__ == '__main__':
    pprint(invoke(schema, shell=True, fancy=True, colorful=True))
