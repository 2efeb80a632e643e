from rich.pretty import pprint

from clasp import *

__prog__ = "example"

verbose = Value(bool)
jobs = Value(int, 1)
ratio = Value(float, 0.5)
name = Argument(str)
source = Value(str)
files = Items(str)

parser = Parser(
    version="example 1.0",
    header="Copies FILES next to SOURCE.",
    footer="Report bugs to <bugs@example.org>.",
)
parser.add_option("-v", "--verbose", target=verbose, descr="explain what is being done")
parser.add_option("-j", "--jobs", target=jobs, descr="number of parallel jobs")
parser.add_option("--ratio", target=ratio, descr="compression ratio")
parser.add_group("Naming")
parser.add_option("-n", "--name", target=name, descr="name of the run")
parser.add_required("SOURCE", target=source, descr="source directory")
parser.add_list("FILES", target=files, descr="files to copy")


if __name__ == '__main__':
    if invoke(parser):
        pprint(parser)
        pprint({
            "verbose": verbose.value,
            "jobs": jobs.value,
            "ratio": ratio.value,
            "name": name.value if name else None,
            "source": source.value,
            "files": files.values,
        })
