"""
FSP Grammar - Lark EBNF grammar for filter/sort/page clause expressions.

This grammar defines a compact, declarative syntax for one request:
- Field filters with include (+) / exclude (-) sigils
- Sort keys in priority order with a direction
- A page window (OFFSET / LIMIT)

Example:
    WHERE +name = "Joe", -status = closed, owner = null
    ORDER BY created DESC, name
    OFFSET 10 LIMIT 20

Values are kept as raw strings; typing happens in the criteria factories.
"""

FSP_GRAMMAR = r'''
start: query

// Every clause is optional, but the order is fixed
query: where_clause? order_clause? offset_clause? limit_clause?

// WHERE: filters, ANDed across fields, ORed within a field
where_clause: "WHERE"i filter_list

filter_list: filter_term ("," filter_term)*

filter_term: SIGN? NAME "=" value

value: STRING
     | WORD
     | "null" -> null_val

// ORDER BY: first key is the primary key
order_clause: "ORDER"i "BY"i sort_list

sort_list: sort_term ("," sort_term)*

sort_term: NAME sort_dir?

sort_dir: ASC | DESC
ASC: "ASC"i
DESC: "DESC"i

// Page window
offset_clause: "OFFSET"i INT
limit_clause: "LIMIT"i INT

// Terminals
SIGN: "+" | "-"
NAME: /[a-zA-Z_][a-zA-Z0-9_.]*/
WORD: /[^\s,"'=]+/
INT: /[0-9]+/
STRING: /"[^"]*"/ | /'[^']*'/

// Whitespace
%import common.WS
%ignore WS
'''


def get_grammar() -> str:
    """Return the FSP grammar string for use with Lark."""
    return FSP_GRAMMAR
