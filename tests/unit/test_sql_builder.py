"""Tests for the fluent SQL builder."""

from dataclasses import dataclass
from typing import Annotated, List, Optional
from unittest.mock import Mock

import pytest

from sqlbuilder import (
    BufferTarget,
    BuilderConfiguration,
    Column,
    IdentityNamingConvention,
    NotMapped,
    SnakeCaseNamingConvention,
    SqlBuilder,
    table,
)
from sqlbuilder.common.exceptions import ErrorCode, SqlBuilderError
from sqlbuilder.protocols import EntityMetadataProvider
from sqlbuilder.types import FieldMetadata


@dataclass
class Customer:
    Id: int
    Name: str


@table("Orders")
@dataclass
class Order:
    OrderId: int
    CustomerId: int


@dataclass
class Contact:
    Id: int
    FirstName: str
    LastName: str
    Email: str


@dataclass
class Person:
    FirstName: str
    LastName: str
    Id: int


@dataclass
class CustomerAddress:
    City: str
    Country: str
    PostalCode: str


@dataclass
class Employee:
    Id: int
    ManagerId: Optional[int]


@dataclass
class Account:
    Id: Annotated[int, Column("custom_id")]
    Name: str
    Secret: Annotated[str, NotMapped()]
    Orders: List[Order]


END_TO_END_SQL = (
    "SELECT kvr0.Id AS Id, kvr0.Name AS Name, kvr1.OrderId AS OrderId, kvr1.CustomerId AS CustomerId "
    "FROM Customer kvr0 JOIN Orders kvr1 ON kvr0.Id = kvr1.CustomerId"
)


class TestSelect:
    """Test select-list operations."""

    def test_end_to_end_query(self):
        sql = (
            SqlBuilder()
            .select_all(Customer)
            .select_all(Order)
            .from_(Customer)
            .join(Customer, Order, lambda c: c.Id, lambda o: o.CustomerId)
            .build()
        )

        assert sql == END_TO_END_SQL

    def test_end_to_end_query_with_name_selectors(self):
        sql = (
            SqlBuilder()
            .select_all(Customer)
            .select_all(Order)
            .from_(Customer)
            .join(Customer, Order, "Id", "CustomerId")
            .build()
        )

        assert sql == END_TO_END_SQL

    def test_select_all_excludes_fields(self):
        sql = SqlBuilder().select_all(Contact, exclude=[lambda c: c.Email]).from_(Contact).build()

        assert sql == (
            "SELECT kvr0.Id AS Id, kvr0.FirstName AS FirstName, kvr0.LastName AS LastName "
            "FROM Contact kvr0"
        )

    def test_select_all_accepts_single_exclusion(self):
        sql = SqlBuilder().select_all(Contact, exclude="Email").build()

        assert "Email" not in sql

    def test_select_all_moves_first_field_to_front(self):
        sql = SqlBuilder().select_all(Person, first=lambda p: p.Id).build()

        assert sql == "SELECT kvr0.Id AS Id, kvr0.FirstName AS FirstName, kvr0.LastName AS LastName"

    def test_select_all_skips_excluded_and_unsupported_fields(self):
        sql = SqlBuilder().select_all(Account).from_(Account).build()

        assert sql == "SELECT kvr0.custom_id AS Id, kvr0.Name AS Name FROM Account kvr0"

    def test_select_all_from_begin(self):
        sql = SqlBuilder().select_all(Customer).select_all(Order, from_begin=True).build()

        assert sql == (
            "SELECT kvr1.OrderId AS OrderId, kvr1.CustomerId AS CustomerId, "
            "kvr0.Id AS Id, kvr0.Name AS Name"
        )

    def test_select_all_with_explicit_alias(self):
        builder = SqlBuilder().select_all(Customer, alias="c").from_(Customer, alias="c")

        assert builder.build() == "SELECT c.Id AS Id, c.Name AS Name FROM Customer c"
        assert builder.alias_of(Customer) is None

    def test_select_all_of(self):
        sql = SqlBuilder().select_all_of(Customer, Order, first_fields=[None, "CustomerId"]).build()

        assert sql == (
            "SELECT kvr0.Id AS Id, kvr0.Name AS Name, "
            "kvr1.CustomerId AS CustomerId, kvr1.OrderId AS OrderId"
        )

    def test_select_all_of_rejects_extra_first_fields(self):
        with pytest.raises(SqlBuilderError) as exc_info:
            SqlBuilder().select_all_of(Customer, first_fields=["Id", "Name"])

        assert exc_info.value.error_code == ErrorCode.INVALID_ARGUMENT

    def test_select_columns_keeps_given_order(self):
        sql = SqlBuilder().select_columns(Contact, [lambda c: c.Email, "Id"]).from_(Contact).build()

        assert sql == "SELECT kvr0.Email AS Email, kvr0.Id AS Id FROM Contact kvr0"

    def test_select_columns_does_not_filter(self):
        sql = SqlBuilder().select_columns(Account, ["Secret"]).build()

        assert sql == "SELECT kvr0.Secret AS Secret"

    def test_select_column(self):
        sql = (
            SqlBuilder()
            .select_column(Customer, "Id")
            .select_column(Customer, lambda c: c.Name, column_alias="CustomerName")
            .build()
        )

        assert sql == "SELECT kvr0.Id AS Id, kvr0.Name AS CustomerName"

    def test_select_column_uses_column_override(self):
        sql = SqlBuilder().select_column(Account, "Id").build()

        assert sql == "SELECT kvr0.custom_id AS Id"

    def test_select_raw_column(self):
        builder = SqlBuilder(naming_convention=SnakeCaseNamingConvention().use_sql_server())

        sql = builder.select_raw_column(Customer, "CreatedAt").select_raw_column(Customer, "x", "Total").build()

        assert sql == "SELECT kvr0.CreatedAt AS CreatedAt, kvr0.x AS Total"

    def test_select_raw_column_rejects_empty_column(self):
        with pytest.raises(SqlBuilderError) as exc_info:
            SqlBuilder().select_raw_column(Customer, "")

        assert exc_info.value.error_code == ErrorCode.INVALID_ARGUMENT

    def test_new_alias_for_repeated_entity(self):
        builder = SqlBuilder().select_all(Employee).select_all(Employee, new_alias=True)

        assert builder.build() == (
            "SELECT kvr0.Id AS Id, kvr0.ManagerId AS ManagerId, kvr1.Id AS Id, kvr1.ManagerId AS ManagerId"
        )
        assert builder.alias_of(Employee) == "kvr1"

    def test_select_none_binds_new_alias(self):
        builder = SqlBuilder().select_all(Employee).from_(Employee)
        employee_alias = builder.alias_of(Employee)

        builder.select_none(Employee)
        manager_alias = builder.alias_of(Employee)
        builder.join(Employee, Employee, "ManagerId", "Id", left_alias=employee_alias)

        assert manager_alias == "kvr1"
        assert builder.build() == (
            "SELECT kvr0.Id AS Id, kvr0.ManagerId AS ManagerId "
            "FROM Employee kvr0 JOIN Employee kvr1 ON kvr0.ManagerId = kvr1.Id"
        )


class TestBody:
    """Test FROM, WHERE, ORDER BY and JOIN."""

    @pytest.fixture
    def builder(self):
        return SqlBuilder().select_all(Customer).from_(Customer)

    def test_conditions_and_order(self, builder):
        sql = (
            builder
            .where(Customer, lambda c: c.Id, 5)
            .and_(Customer, "Name", "'Bob'", op="<>")
            .or_raw("kvr0.Name IS NULL")
            .order_by(Customer, "Name", ascending=False)
            .build()
        )

        assert sql == (
            "SELECT kvr0.Id AS Id, kvr0.Name AS Name FROM Customer kvr0 "
            "WHERE kvr0.Id = 5 AND kvr0.Name <> 'Bob' OR kvr0.Name IS NULL ORDER BY kvr0.Name DESC"
        )

    def test_or_condition(self, builder):
        sql = builder.where_raw("1 = 1").or_(Customer, "Id", "@id").build()

        assert sql.endswith(" WHERE 1 = 1 OR kvr0.Id = @id")

    def test_and_raw(self, builder):
        assert builder.where(Customer, "Id", 1).and_raw("kvr0.Name LIKE 'A%'").build().endswith(
            " WHERE kvr0.Id = 1 AND kvr0.Name LIKE 'A%'"
        )

    def test_order_by_raw(self, builder):
        assert builder.order_by_raw("kvr0.Name").build().endswith(" ORDER BY kvr0.Name ASC")
        assert builder.order_by_raw("kvr0.Id", ascending=False).build().endswith(" ORDER BY kvr0.Id DESC")

    def test_condition_with_explicit_alias(self):
        builder = SqlBuilder().where(Customer, "Id", 1, alias="c")

        assert builder.build() == "SELECT  WHERE c.Id = 1"
        assert builder.alias_of(Customer) is None

    def test_excluded_fields_can_be_filtered_on(self):
        sql = SqlBuilder().from_(Account).where(Account, "Secret", "'x'").build()

        assert sql.endswith(" FROM Account kvr0 WHERE kvr0.Secret = 'x'")

    def test_condition_uses_column_override(self):
        sql = SqlBuilder().from_(Account).where(Account, lambda a: a.Id, 3).build()

        assert sql.endswith(" WHERE kvr0.custom_id = 3")

    @pytest.mark.parametrize("method,keyword", [
        ("join", "JOIN"),
        ("left_join", "LEFT JOIN"),
        ("right_join", "RIGHT JOIN"),
        ("full_join", "FULL JOIN"),
    ])
    def test_join_kinds(self, method, keyword):
        builder = SqlBuilder().from_(Customer)

        getattr(builder, method)(Customer, Order, "Id", "CustomerId")

        assert builder.build().endswith(f" FROM Customer kvr0 {keyword} Orders kvr1 ON kvr0.Id = kvr1.CustomerId")

    def test_join_with_explicit_aliases_and_operator(self):
        sql = (
            SqlBuilder()
            .from_(Customer, alias="c")
            .left_join(Customer, Order, "Id", "CustomerId", left_alias="c", right_alias="o", op=">=")
            .build()
        )

        assert sql.endswith(" FROM Customer c LEFT JOIN Orders o ON c.Id >= o.CustomerId")

    def test_select_from(self):
        assert SqlBuilder().select_from(Customer).build() == (
            "SELECT kvr0.Id AS Id, kvr0.Name AS Name FROM Customer kvr0"
        )

    def test_select_from_where(self):
        assert SqlBuilder().select_from_where(Customer, lambda c: c.Id, 1).build() == (
            "SELECT kvr0.Id AS Id, kvr0.Name AS Name FROM Customer kvr0 WHERE kvr0.Id = 1"
        )

    def test_select_from_where_rejects_bad_field_before_appending(self):
        builder = SqlBuilder()

        with pytest.raises(SqlBuilderError):
            builder.select_from_where(Customer, "Missing", 1)

        assert builder.build() == "SELECT "
        assert builder.alias_of(Customer) is None


class TestTableNames:
    """Test table-name precedence."""

    @pytest.fixture
    def configuration(self):
        return BuilderConfiguration()

    def test_type_override(self, configuration):
        assert SqlBuilder(configuration).from_(Order).build().endswith(" FROM Orders kvr0")

    def test_process_wide_mapping_shadows_type_override(self, configuration):
        configuration.map_table(Order, "GlobalOrders")

        assert SqlBuilder(configuration).from_(Order).build().endswith(" FROM GlobalOrders kvr0")

    def test_instance_mapping_shadows_process_wide_mapping(self, configuration):
        configuration.map_table(Order, "GlobalOrders")
        builder = SqlBuilder(configuration).map_table(Order, "InstanceOrders")

        assert builder.from_(Order).build().endswith(" FROM InstanceOrders kvr0")

    def test_literal_name_shadows_everything(self, configuration):
        configuration.map_table(Order, "GlobalOrders")
        builder = SqlBuilder(configuration).map_table(Order, "InstanceOrders")

        assert builder.from_(Order, table_name="dbo.Literal").build().endswith(" FROM dbo.Literal kvr0")

    def test_process_wide_mapping_is_read_at_resolution_time(self, configuration):
        builder = SqlBuilder(configuration)
        configuration.map_table(Customer, "tbl_customer")

        assert builder.from_(Customer).build().endswith(" FROM tbl_customer kvr0")

    def test_instance_mapping_does_not_leak(self, configuration):
        SqlBuilder(configuration).map_table(Customer, "Mine")

        assert SqlBuilder(configuration).from_(Customer).build().endswith(" FROM Customer kvr0")

    def test_explicit_names_are_not_pluralized_but_escaped(self, configuration):
        convention = IdentityNamingConvention(plural_table_names=True).use_sql_server()
        builder = SqlBuilder(configuration, naming_convention=convention)

        sql = builder.from_(Customer).join(Customer, Order, "Id", "CustomerId").build()

        assert sql == "SELECT  FROM [Customers] kvr0 JOIN [Orders] kvr1 ON kvr0.[Id] = kvr1.[CustomerId]"

    def test_join_uses_mapped_table(self, configuration):
        sql = SqlBuilder(configuration).map_table(Order, "sales.orders").from_(Customer).join(
            Customer, Order, "Id", "CustomerId"
        ).build()

        assert " JOIN sales.orders kvr1 " in sql

    def test_map_table_rejects_empty_name(self):
        with pytest.raises(SqlBuilderError):
            SqlBuilder().map_table(Customer, "")


class TestNamingConventions:
    """Test builder output under different conventions."""

    def test_snake_case(self):
        builder = SqlBuilder(naming_convention=SnakeCaseNamingConvention())

        sql = builder.select_columns(CustomerAddress, ["City", "Country", "PostalCode"]).from_(CustomerAddress).build()

        assert sql == (
            "SELECT kvr0.city AS City, kvr0.country AS Country, kvr0.postal_code AS PostalCode "
            "FROM customer_address kvr0"
        )

    def test_sql_server(self):
        builder = SqlBuilder(naming_convention=IdentityNamingConvention().use_sql_server())

        sql = builder.select_all(Account).from_(Account).build()

        assert sql == "SELECT kvr0.[custom_id] AS [Id], kvr0.[Name] AS [Name] FROM [Account] kvr0"

    def test_global_convention_is_captured_at_construction(self):
        SqlBuilder.use_global_naming_convention(SnakeCaseNamingConvention())
        snake_builder = SqlBuilder()
        SqlBuilder.use_global_naming_convention(IdentityNamingConvention())
        identity_builder = SqlBuilder()

        assert snake_builder.from_(CustomerAddress).build().endswith(" FROM customer_address kvr0")
        assert identity_builder.from_(CustomerAddress).build().endswith(" FROM CustomerAddress kvr0")

    def test_global_table_mapping(self):
        SqlBuilder.map_global_table(Customer, "Clients")

        assert SqlBuilder().from_(Customer).build().endswith(" FROM Clients kvr0")

    def test_invalid_global_convention(self):
        with pytest.raises(SqlBuilderError):
            SqlBuilder.use_global_naming_convention(object())

    def test_custom_metadata_provider(self):
        provider = Mock(spec=EntityMetadataProvider)
        provider.get_mappable_fields.return_value = [FieldMetadata(name="Key", annotation=int)]
        provider.get_field_override_name.return_value = "pk"
        provider.get_type_override_name.return_value = "widgets"
        provider.has_field.return_value = True

        sql = SqlBuilder(metadata_provider=provider).select_all(Customer).from_(Customer).build()

        assert sql == "SELECT kvr0.pk AS Key FROM widgets kvr0"


class TestBuild:
    """Test raw appends, idempotence and error atomicity."""

    def test_build_is_idempotent(self):
        builder = SqlBuilder().select_all(Customer).from_(Customer)

        assert builder.build() == builder.build()
        assert str(builder) == builder.build()

    def test_append_raw_body(self):
        sql = (
            SqlBuilder()
            .select_all(Customer)
            .from_(Customer)
            .append_raw(" GROUP BY kvr0.Name")
            .append_raw(" HAVING count(*) > 0")
            .build()
        )

        assert sql.endswith(" FROM Customer kvr0 GROUP BY kvr0.Name HAVING count(*) > 0")

    def test_append_raw_select(self):
        sql = (
            SqlBuilder()
            .select_all(Customer)
            .append_raw(", count(*) AS Total", target=BufferTarget.SELECT)
            .from_(Customer)
            .build()
        )

        assert sql == "SELECT kvr0.Id AS Id, kvr0.Name AS Name, count(*) AS Total FROM Customer kvr0"

    def test_append_raw_accepts_target_value(self):
        sql = SqlBuilder().append_raw("1", target="select").build()

        assert sql == "SELECT 1"

    def test_clause_order_is_not_validated(self):
        sql = SqlBuilder().where(Customer, "Id", 1).from_(Customer).build()

        assert sql == "SELECT  WHERE kvr0.Id = 1 FROM Customer kvr0"

    def test_invalid_selector_appends_nothing(self):
        builder = SqlBuilder().select_all(Order).from_(Order)
        before = builder.build()

        with pytest.raises(SqlBuilderError) as exc_info:
            builder.where(Customer, lambda c: c.Id + 1, 5)

        assert exc_info.value.error_code == ErrorCode.INVALID_FIELD_REFERENCE
        assert builder.build() == before
        assert builder.alias_of(Customer) is None

    def test_unknown_field_in_join_appends_nothing(self):
        builder = SqlBuilder().from_(Customer)
        before = builder.build()

        with pytest.raises(SqlBuilderError) as exc_info:
            builder.join(Customer, Order, "Id", "Missing")

        assert exc_info.value.error_code == ErrorCode.UNKNOWN_FIELD
        assert builder.build() == before
        assert builder.alias_of(Order) is None

    @pytest.mark.parametrize("call", [
        lambda b: b.from_("Customer"),
        lambda b: b.select_all(Customer(1, "Ann")),
        lambda b: b.select_none(42),
        lambda b: b.select_raw_column("Customer", "Id"),
    ])
    def test_non_class_entity_is_rejected(self, call):
        with pytest.raises(SqlBuilderError) as exc_info:
            call(SqlBuilder())

        assert exc_info.value.error_code == ErrorCode.INVALID_ENTITY

    def test_create(self):
        assert isinstance(SqlBuilder.create(), SqlBuilder)
