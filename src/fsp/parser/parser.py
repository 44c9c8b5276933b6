"""
FSP Parser - Lark-based parser for filter/sort/page clause expressions.

Parses expression strings into an FSPQuery holding FieldParameters,
SortParameters and a PageParameter.
"""

from lark import Lark, Transformer
from lark.exceptions import LarkError, UnexpectedInput, VisitError

from fsp.exceptions import FSPError, ParameterParseError
from fsp.parser.grammar import get_grammar
from fsp.parameters import (
    FSPQuery,
    FieldParameter,
    PageParameter,
    SortDirection,
    SortParameter,
)


class FSPTransformer(Transformer):
    """
    Lark Transformer that converts the parse tree to FSP parameters.
    """

    # --- Terminal handling ---

    def NAME(self, token):
        return str(token)

    def SIGN(self, token):
        return str(token)

    def WORD(self, token):
        return str(token)

    def INT(self, token):
        return int(token)

    def STRING(self, token):
        # Remove surrounding quotes
        s = str(token)
        return s[1:-1]

    def ASC(self, token):
        return SortDirection.ASCENDING

    def DESC(self, token):
        return SortDirection.DESCENDING

    # --- Values ---

    def null_val(self, _):
        return None

    def value(self, items):
        return items[0]

    # --- WHERE ---

    def filter_term(self, items):
        if len(items) == 3:
            sign, name, raw_value = items
            return FieldParameter(sign + name, raw_value)
        name, raw_value = items
        return FieldParameter(name, raw_value)

    def filter_list(self, items):
        return list(items)

    def where_clause(self, items):
        return ("where", items[0])

    # --- ORDER BY ---

    def sort_dir(self, items):
        return items[0] if items else SortDirection.ASCENDING

    def sort_term(self, items):
        direction = items[1] if len(items) > 1 else SortDirection.ASCENDING
        return SortParameter(items[0], direction)

    def sort_list(self, items):
        return list(items)

    def order_clause(self, items):
        return ("order", items[0])

    # --- Page window ---

    def offset_clause(self, items):
        return ("offset", items[0])

    def limit_clause(self, items):
        return ("limit", items[0])

    # --- Top-level query ---

    def query(self, items):
        clauses = dict(items)
        return FSPQuery(
            filters=clauses.get("where", []),
            sorts=clauses.get("order", []),
            page=PageParameter(clauses.get("offset"), clauses.get("limit")),
        )

    def start(self, items):
        return items[0]


class FSPParser:
    """
    FSP Parser using Lark.

    Parses clause expressions into FSPQuery objects.

    Example:
        parser = FSPParser()
        query = parser.parse("WHERE -status = closed ORDER BY created DESC LIMIT 20")
    """

    def __init__(self):
        self._parser = Lark(
            get_grammar(),
            parser='lalr',
            transformer=FSPTransformer(),
        )

    def parse(self, text: str) -> FSPQuery:
        """
        Parse an FSP expression.

        Args:
            text: The expression to parse; empty means no filter, sort or page

        Returns:
            FSPQuery with the parsed parameters

        Raises:
            ParameterParseError: If the expression is not valid syntax
            FSPError: If a parsed parameter is invalid (e.g. negative page)
        """
        try:
            return self._parser.parse(text)
        except VisitError as e:
            if isinstance(e.orig_exc, FSPError):
                raise e.orig_exc from None
            raise
        except UnexpectedInput as e:
            raise ParameterParseError(
                f"Invalid FSP expression at line {e.line}, column {e.column}",
                text=text,
                line=e.line,
                column=e.column,
            ) from e
        except LarkError as e:
            raise ParameterParseError(f"Invalid FSP expression: {e}", text=text) from e


def parse(text: str) -> FSPQuery:
    """
    Convenience function to parse an FSP expression.

    Creates a parser instance and parses the expression.
    For repeated parsing, use FSPParser directly for better performance.

    Args:
        text: The expression to parse

    Returns:
        FSPQuery with the parsed parameters
    """
    parser = FSPParser()
    return parser.parse(text)
