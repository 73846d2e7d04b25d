import pytest

from prisma_typed_ids.codegen.languages.typescript.patterns import (
    retype_bare,
    retype_field,
    retype_filter_union,
    retype_name_token,
    retype_nullable,
)


def test_bare_required_and_optional():
    assert retype_bare("  id: string\n", "id", "UserId") == ("  id: UserId\n", 1)
    assert retype_bare("  id?: string\n", "id", "UserId") == ("  id?: UserId\n", 1)


def test_bare_respects_separators_and_comments():
    text, count = retype_bare("{ id: string; name: string }", "id", "UserId")
    assert (text, count) == ("{ id: UserId; name: string }", 1)

    text, count = retype_bare("  id: string // primary key\n", "id", "UserId")
    assert text == "  id: UserId // primary key\n"


def test_bare_handles_crlf():
    assert retype_bare("  id: string\r\n", "id", "UserId") == ("  id: UserId\r\n", 1)


@pytest.mark.parametrize(
    "text",
    [
        "  uuid: string\n",
        "  authorId: string\n",
        "  id: string[]\n",
        "  id: number\n",
        "  id: string | null\n",
        "  obj.id: string\n",
    ],
)
def test_bare_ignores_other_shapes(text):
    assert retype_bare(text, "id", "UserId") == (text, 0)


def test_nullable_keeps_null_member():
    text, count = retype_nullable("  editorId?: string | null\n", "editorId", "UserId")
    assert (text, count) == ("  editorId?: UserId | null\n", 1)


def test_nullable_ignores_non_nullable():
    assert retype_nullable("  editorId: string\n", "editorId", "UserId")[1] == 0


@pytest.mark.parametrize(
    "before,after",
    [
        (
            '    id?: StringFilter<"User"> | string\n',
            '    id?: StringFilter<"User"> | UserId\n',
        ),
        (
            "    id?: StringFieldUpdateOperationsInput | string\n",
            "    id?: StringFieldUpdateOperationsInput | UserId\n",
        ),
        (
            '    editorId?: StringNullableFilter<"Post"> | string | null\n',
            '    editorId?: StringNullableFilter<"Post"> | UserId | null\n',
        ),
        (
            "    editorId?: NullableStringFieldUpdateOperationsInput | string | null\n",
            "    editorId?: NullableStringFieldUpdateOperationsInput | UserId | null\n",
        ),
    ],
)
def test_filter_union_keeps_wrapper(before, after):
    field = before.strip().split("?")[0]
    assert retype_filter_union(before, field, "UserId") == (after, 1)


def test_filter_union_ignores_other_base_types():
    text = '    id?: IntFilter<"Log"> | number\n'
    assert retype_filter_union(text, "id", "LogId") == (text, 0)
    text = '    expiresAt?: DateTimeFilter<"Session"> | Date | string\n'
    assert retype_filter_union(text, "expiresAt", "SessionId") == (text, 0)


def test_retype_field_applies_every_recipe():
    text = (
        "  id: string\n"
        "  editorId?: string | null\n"
        '  id?: StringFilter<"User"> | string\n'
    )
    out, count = retype_field(text, "id", "UserId")
    assert count == 2
    assert "  id: UserId\n" in out
    assert '  id?: StringFilter<"User"> | UserId\n' in out
    assert "  editorId?: string | null\n" in out


def test_recipes_are_idempotent():
    text = (
        "  userId: string\n"
        "  userId?: string | null\n"
        '  userId?: StringFilter<"Comment"> | string\n'
        "  userId?: NullableStringFieldUpdateOperationsInput | string | null\n"
    )
    once, first = retype_name_token(text, "userId", "UserId")
    twice, second = retype_name_token(once, "userId", "UserId")
    assert first == 4
    assert second == 0
    assert twice == once
