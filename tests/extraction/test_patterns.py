"""Tests for the pattern extractors."""

from __future__ import annotations

from metascan.extraction.patterns import (
    decorator_names,
    extract_class_headers,
    extract_methods,
    extract_related_class,
    extract_routes,
    line_of,
    match_property,
)
from tests._fixtures.repo_builder import dedent


def test_class_headers_tolerate_export_and_abstract() -> None:
    text = dedent(
        """
        export class Alpha {}
        abstract class Beta {}
        export abstract class Gamma extends Beta {}
          class Delta {}
        """
    )

    names = [header.name for header in extract_class_headers(text)]

    assert names == ["Alpha", "Beta", "Gamma", "Delta"]


def test_class_header_offset_points_after_name() -> None:
    text = "export class Account {\n}\n"

    [header] = extract_class_headers(text)

    assert text[: header.offset].endswith("Account")


def test_methods_capture_params_and_return_type() -> None:
    text = dedent(
        """
        export class UserService {
          async findAll(): Promise<User[]> {
            return [];
          }

          private compute(a: number, b: number): number {
            return a + b;
          }
        }
        """
    )

    methods = extract_methods(text)

    assert [m.name for m in methods] == ["findAll", "compute"]
    assert methods[0].params == ""
    assert methods[0].return_type == "Promise<User[]>"
    assert methods[1].params == "a: number, b: number"
    assert methods[1].docs == "Input: (a: number, b: number)\nOutput: number"


def test_methods_with_function_typed_params_are_not_matched() -> None:
    text = dedent(
        """
        export class Runner {
          run(cb: (x: number) => void): void {
            cb(1);
          }
        }
        """
    )

    assert extract_methods(text) == []


def test_route_extractor_binds_verb_path_and_signature() -> None:
    text = dedent(
        """
        @Controller('users')
        export class UsersController {
          @Get('/users/:id')
          getUser(id: string): Promise<User> {
            return this.service.find(id);
          }
        }
        """
    )

    [route] = extract_routes(text)

    assert route.method == "GET"
    assert route.route == "/users/:id"
    assert route.name == "getUser"
    assert route.return_type == "Promise<User>"
    assert route.docs == "Input: (id: string)\nOutput: Promise<User>"


def test_route_extractor_skips_intervening_decorators() -> None:
    text = dedent(
        """
        @Post("/users")
        create(dto: CreateUserDto): Promise<User> {
          return this.service.create(dto);
        }

        @Put('/users/:id')
        @HttpCode(204)
        update(id: string, dto: UpdateUserDto): Promise<void> {
          return this.service.update(id, dto);
        }
        """
    )

    routes = extract_routes(text)

    assert [(r.method, r.route, r.name) for r in routes] == [
        ("POST", "/users", "create"),
        ("PUT", "/users/:id", "update"),
    ]


def test_route_decorator_without_path_is_ignored() -> None:
    text = "@Get()\nfindAll(): Promise<User[]> {\n  return [];\n}\n"

    assert extract_routes(text) == []


def test_property_with_object_argument_and_initializer() -> None:
    match = match_property("@Column({ type: 'varchar', length: 255 }) status: Status = Status.Active; ")

    assert match is not None
    assert match.name == "status"
    assert match.declared_type == "Status"
    assert match.decorator_text == "@Column({ type: 'varchar', length: 255 })"


def test_property_with_stacked_decorators_and_optional_marker() -> None:
    match = match_property("@Column() @IsOptional() readonly nickname?: string; ")

    assert match is not None
    assert match.name == "nickname"
    assert match.declared_type == "string"
    assert decorator_names(match.decorator_text) == ["Column", "IsOptional"]


def test_property_with_nested_parentheses_in_decorator() -> None:
    match = match_property("@OneToMany(() => Order, (order) => order.user) orders: Order[]; ")

    assert match is not None
    assert match.name == "orders"
    assert match.declared_type == "Order[]"


def test_property_with_function_type_keeps_arrow() -> None:
    match = match_property("@Field() resolver: () => void; ")

    assert match is not None
    assert match.declared_type == "() => void"


def test_decorated_method_buffer_is_not_a_property() -> None:
    buffer = "@Get(':id') async findOne(id: string): Promise<User> { return this.users.findOne(id); } "

    assert match_property(buffer) is None


def test_decorator_names_ignore_at_signs_inside_arguments() -> None:
    names = decorator_names("@Column({ default: 'admin@example.com' }) @Index() @Index()")

    assert names == ["Column", "Index", "Index"]


def test_related_class_from_lazy_reference() -> None:
    statement = "@OneToMany(() => ShippingAddressEntity, (a) => a.user) addresses: ShippingAddressEntity[]; "

    assert extract_related_class(statement) == "ShippingAddressEntity"


def test_related_class_tolerates_spacing() -> None:
    assert extract_related_class("@ManyToOne( ( ) =>User) owner: User; ") == "User"


def test_related_class_absent_for_string_reference() -> None:
    assert extract_related_class("@ManyToOne('UserEntity', 'orders') user: UserEntity; ") is None


def test_line_of_counts_from_one() -> None:
    text = "a\nb\nc"

    assert line_of(text, 0) == 1
    assert line_of(text, text.index("c")) == 3
