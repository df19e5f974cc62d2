import re


class QueryBuilder:
    """Builds parameterized SQL. Names go into the text, values only into params."""

    def __init__(self):
        self._safe_ident_pattern = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')

    def _ident(self, identifier):
        if not identifier or not self._safe_ident_pattern.match(str(identifier)):
            raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
        return identifier

    def build_select_all(self, table_name):
        table = self._ident(table_name)
        return f"SELECT {table}.* FROM {table}", ()

    def build_select_by_key(self, table_name, key_column, value):
        table = self._ident(table_name)
        sql = f"SELECT {table}.* FROM {table} WHERE {self._ident(key_column)} = ?"
        return sql, (value,)

    def build_select_where(self, table_name, predicates):
        """An empty predicate mapping selects every row, same as build_select_all."""
        if not predicates:
            return self.build_select_all(table_name)

        table = self._ident(table_name)
        where_parts = []
        params = []
        for col, val in predicates.items():
            where_parts.append(f"{self._ident(col)} = ?")
            params.append(val)
        sql = f"SELECT {table}.* FROM {table} WHERE " + " AND ".join(where_parts)
        return sql, tuple(params)

    def build_insert(self, table_name, columns, values):
        columns = list(columns)
        values = list(values)
        if len(columns) != len(values):
            raise ValueError(f"{len(columns)} columns but {len(values)} values for INSERT into {table_name}")

        table = self._ident(table_name)
        fields = ", ".join(self._ident(c) for c in columns)
        placeholders = ", ".join(["?" for _ in columns])
        sql = f"INSERT INTO {table} ({fields}) VALUES ({placeholders})"
        return sql, tuple(values)

    def build_update(self, table_name, columns, values, key_column, key_value):
        columns = list(columns)
        values = list(values)
        if len(columns) != len(values):
            raise ValueError(f"{len(columns)} columns but {len(values)} values for UPDATE of {table_name}")

        table = self._ident(table_name)
        set_clause = ", ".join(f"{self._ident(c)} = ?" for c in columns)
        sql = f"UPDATE {table} SET {set_clause} WHERE {self._ident(key_column)} = ?"
        return sql, tuple(values) + (key_value,)

    def build_join_select(self, left_table, right_table, join_condition, filter_column, filter_value):
        """``join_condition`` is built by the caller from schema names only."""
        left = self._ident(left_table)
        right = self._ident(right_table)
        sql = (
            f"SELECT {right}.* FROM {left} "
            f"JOIN {right} ON {join_condition} "
            f"WHERE {left}.{self._ident(filter_column)} = ?"
        )
        return sql, (filter_value,)

    def build_join_condition(self, left_table, left_column, right_table, right_column):
        return (
            f"{self._ident(left_table)}.{self._ident(left_column)} = "
            f"{self._ident(right_table)}.{self._ident(right_column)}"
        )

    def build_delete(self, table_name, key_column, key_value):
        table = self._ident(table_name)
        sql = f"DELETE FROM {table} WHERE {self._ident(key_column)} = ?"
        return sql, (key_value,)
