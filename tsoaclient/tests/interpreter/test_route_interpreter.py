# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from tsoaclient.core.diagnostics import Diagnostic
from tsoaclient.core.errors import AsyncReturnTypeError, InvalidControllerError, InvalidRouteMethodError
from tsoaclient.interpreter import (
	HttpVerb,
	extract_placeholders,
	interpret_controller,
	interpret_method,
	is_controller_candidate,
	read_annotations,
)
from tsoaclient.parser import parse_module
from tsoaclient.parser.ast import ClassDecl, KeywordType, TypeRef


def _class(source: str) -> ClassDecl:
	(cls,) = parse_module(source).classes
	return cls


def _controller_source(body: str, header: str = '@Route("users")\nexport class UserController extends Controller') -> str:
	return f"{header} {{\n{body}\n}}\n"


def test_interprets_valid_controller():
	cls = _class(
		_controller_source(
			"""
	constructor(private service: UserService) { super(); }

	@Get("{id}")
	public async getUser(@Path() id: string): Promise<User> { return this.service.get(id); }

	@post()
	public create(@Body() body: UserCreate): User { return body as User; }

	@Delete("{org}/members/{id}/{org}")
	public remove(id: string, org: string) {}
"""
		)
	)
	diagnostics: list[Diagnostic] = []
	controller = interpret_controller(cls, diagnostics=diagnostics)
	assert diagnostics == []
	assert controller.name == "UserController"
	assert controller.route == "users"
	assert [m.name for m in controller.methods] == ["getUser", "create", "remove"]

	get_user, create, remove = controller.methods
	assert get_user.http_verb is HttpVerb.GET
	assert get_user.route_template == "{id}"
	assert list(get_user.path_params) == ["id"]
	assert get_user.is_async is True
	assert isinstance(get_user.return_type, TypeRef) and get_user.return_type.name == "User"
	assert get_user.controller_route == "users"

	assert create.http_verb is HttpVerb.POST
	assert create.route_template is None
	assert create.path_params == {}
	assert create.body_param.name == "body"
	assert create.return_type.name == "User"

	assert remove.http_verb is HttpVerb.DELETE
	assert list(remove.path_params) == ["org", "id"]
	assert remove.path_params["org"].name == "org"
	with pytest.raises(TypeError):
		remove.path_params["extra"] = remove.path_params["org"]
	assert isinstance(remove.return_type, KeywordType) and remove.return_type.name == "void"


def test_controller_candidates():
	assert is_controller_candidate(_class('@Route("x")\nclass A {}'))
	assert is_controller_candidate(_class("class B extends Controller {}"))
	assert not is_controller_candidate(_class("class C extends Base {}"))
	assert not is_controller_candidate(_class("@Injectable()\nclass D {}"))


@pytest.mark.parametrize(
	("source", "reason"),
	[
		('@Route("x")\nclass A {}', "class must extend Controller"),
		('@Route("x")\nclass A extends Base {}', "class must extend Controller"),
		("class A extends Controller {}", "expected exactly one @Route annotation, found 0"),
		('@Route("a")\n@Route("b")\nclass A extends Controller {}', "expected exactly one @Route annotation, found 2"),
		("@Route()\nclass A extends Controller {}", "@Route takes exactly one string argument"),
		('@Route("a", "b")\nclass A extends Controller {}', "@Route takes exactly one string argument"),
		("@Route(BASE)\nclass A extends Controller {}", "@Route takes exactly one string argument"),
		('@Route("x")\nexport default class extends Controller {}', "class has no name"),
	],
)
def test_invalid_controllers_raise(source: str, reason: str):
	with pytest.raises(InvalidControllerError) as excinfo:
		interpret_controller(_class(source))
	assert str(excinfo.value).endswith(reason)
	assert excinfo.value.phase == "interpret"


def test_invalid_methods_become_warnings():
	cls = _class(
		_controller_source(
			"""
	public helper(): string { return "x"; }

	@Get()
	@Post()
	public twoVerbs() {}

	@Get("a", "b")
	public twoArgs() {}

	@Get(ROUTE)
	public notLiteral() {}

	@Post()
	public twoBodies(@Body() a: A, @Body() b: B) {}

	@Get("{id}")
	public missingParam(key: string) {}

	@Put("{id}")
	public async notPromise(id: string): User { return null; }

	@Get("ok")
	public ok(): string { return "ok"; }
"""
		)
	)
	diagnostics: list[Diagnostic] = []
	controller = interpret_controller(cls, diagnostics=diagnostics)
	assert [m.name for m in controller.methods] == ["ok"]
	assert all(d.severity == "warning" and d.phase == "interpret" for d in diagnostics)
	messages = [d.message for d in diagnostics]
	assert messages == [
		"invalid route method 'UserController.helper': missing HTTP verb annotation",
		"invalid route method 'UserController.twoVerbs': expected exactly one HTTP verb annotation, found @Get, @Post",
		"invalid route method 'UserController.twoArgs': @Get takes at most one argument",
		"invalid route method 'UserController.notLiteral': @Get argument must be a string literal",
		"invalid route method 'UserController.twoBodies': more than one @Body parameter",
		"invalid route method 'UserController.missingParam': route placeholder '{id}' has no matching parameter",
		"async route method 'UserController.notPromise' must return Promise<T>, not 'User'",
	]


def test_dropped_methods_are_kept_as_controller_warnings():
	cls = _class(_controller_source("\tpublic helper() {}\n"))
	controller = interpret_controller(cls)
	assert controller.methods == ()
	(warning,) = controller.warnings
	assert warning.severity == "warning"
	assert warning.message == "invalid route method 'UserController.helper': missing HTTP verb annotation"

	diagnostics: list[Diagnostic] = []
	assert interpret_controller(cls, diagnostics=diagnostics).warnings == (warning,)
	assert diagnostics == [warning]


def test_interpret_method_raises_directly():
	cls = _class(
		_controller_source(
			"""
	@Get()
	public async list(): Array<User> { return []; }
"""
		)
	)
	controller = interpret_controller(cls)
	with pytest.raises(AsyncReturnTypeError) as excinfo:
		interpret_method(controller, cls.methods[0])
	assert isinstance(excinfo.value, InvalidRouteMethodError)
	assert excinfo.value.span.line == 5


def test_async_method_without_return_type_is_void():
	cls = _class(
		_controller_source(
			"""
	@Patch()
	public async patch() {}

	@GET("")
	public async ping() {}
"""
		)
	)
	diagnostics: list[Diagnostic] = []
	controller = interpret_controller(cls, diagnostics=diagnostics)
	assert [m.name for m in controller.methods] == ["ping"]
	(ping,) = controller.methods
	assert ping.route_template == ""
	assert ping.return_type.name == "void"
	assert "missing HTTP verb annotation" in diagnostics[0].message


def test_bare_decorators_are_not_annotations():
	cls = _class("@Deprecated\n@Route(\"x\")\nclass A extends Controller {}")
	annotations = read_annotations(cls.decorators)
	assert [a.name for a in annotations] == ["Route"]
	assert annotations[0].arguments == ("x",)
	assert annotations[0].literal is True


def test_extract_placeholders():
	assert extract_placeholders("users/{id}/posts/{postId}") == ["id", "postId"]
	assert extract_placeholders("{a}{b}/{a}") == ["a", "b", "a"]
	assert extract_placeholders("{}/{{x}}/plain") == ["x"]
	assert extract_placeholders("") == []


def test_http_verb_from_annotation():
	assert HttpVerb.from_annotation("get") is HttpVerb.GET
	assert HttpVerb.from_annotation("DeLeTe") is HttpVerb.DELETE
	assert HttpVerb.from_annotation("Patch") is None
	assert HttpVerb.from_annotation("Route") is None
