import pytest

from tablegen.domains.tables.comments import CommentSuggestion, RuleBasedCommentSuggester
from tablegen.domains.tables.entities import Column


class TestRuleBasedCommentSuggester:
    @pytest.mark.parametrize(
        "data_type, expected",
        [
            ("VARCHAR2(100)", "Stores text of up to 100 characters"),
            ("VARCHAR2", "Stores text of up to 255 characters"),
            ("VARCHAR2(30 CHAR)", "Stores text of up to 30 characters"),
            ("NUMBER(10,2)", "Stores numeric values"),
            ("DATE", "Stores dates"),
            ("TIMESTAMP", "Stores dates and times"),
            ("CLOB", "Stores long text"),
            ("BLOB", "Stores binary data"),
            ("CHAR(1)", "Stores a single character"),
            ("RAW(16)", "Stores values"),
        ],
    )
    def test_comment_from_data_type(self, data_type, expected):
        assert RuleBasedCommentSuggester().describe(Column(name="C", data_type=data_type)) == expected

    def test_key_flags_are_appended(self):
        suggestions = RuleBasedCommentSuggester().suggest(
            "PEDIDO",
            "Customer orders",
            [
                Column(name="ID", data_type="NUMBER", is_primary_key=True),
                Column(name="CLIENTE_ID", data_type="NUMBER", has_foreign_key=True, foreign_table="CLIENTE"),
                Column(name="OTRO_ID", data_type="NUMBER", has_foreign_key=True),
            ],
        )

        assert suggestions == [
            CommentSuggestion("ID", "Stores numeric values, uniquely identifies each row"),
            CommentSuggestion("CLIENTE_ID", "Stores numeric values, references table CLIENTE"),
            CommentSuggestion("OTRO_ID", "Stores numeric values"),
        ]
