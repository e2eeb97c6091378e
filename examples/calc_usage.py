"""Generate the calculator package and print the tree for one expression.

Requires the ``antlr`` extra (``pip install parsegen[antlr]``) and a Java
runtime for the grammar compiler.
"""

from pathlib import Path

from parsegen import ParserGrammar, dump, find_nodes, generate
from parsegen.loader import load_generated

HERE = Path(__file__).parent
OUTPUT = HERE / "calc"

generate(ParserGrammar.load(HERE / "calc.yml"), OUTPUT)
calc = load_generated(OUTPUT)

source = "1 + 2 * (3 + 4)"
tree = calc.Parser.parse(source)
dump(source, tree)

print(f"{len(find_nodes('Add', tree))} additions")
