import pytest

from prisma_typed_ids.codegen import (
    FieldRole,
    ForeignKey,
    ModelRegistry,
    SchemaError,
    convert_datamodel,
)


def _model(name, fields, primary_key=None):
    return {"name": name, "fields": fields, "primaryKey": primary_key}


def _field(name, type_="String", kind="scalar", is_id=False, **extra):
    return {"name": name, "kind": kind, "type": type_, "isId": is_id, **extra}


def test_convert_accepts_bare_datamodel():
    models = convert_datamodel({"models": [_model("User", [_field("id", is_id=True)])]})
    assert [m.name for m in models] == ["User"]
    assert models[0].fields[0].role == FieldRole.IDENTIFIER


@pytest.mark.parametrize("document", [[], {"datamodel": []}, {"enums": []}, {"models": [{}]}])
def test_convert_rejects_malformed_documents(document):
    with pytest.raises(SchemaError):
        convert_datamodel(document)


def test_convert_marks_foreign_key_columns(models):
    post = next(m for m in models if m.name == "Post")
    author_id = post.get_field("authorId")
    assert author_id.role == FieldRole.FOREIGN_KEY
    assert author_id.references == "User"
    assert post.get_field("id").role == FieldRole.IDENTIFIER
    assert post.get_field("author").is_relation


def test_convert_ignores_identifier_of_wrong_type():
    models = convert_datamodel(
        {"models": [_model("AuditLog", [_field("id", type_="Int", is_id=True)])]}
    )
    assert models[0].fields[0].role == FieldRole.OTHER


def test_identified_models_in_schema_order(models):
    registry = ModelRegistry(models)
    assert [m.name for m in registry.identified_models()] == [
        "User",
        "Post",
        "Comment",
        "Session",
        "Team",
    ]
    assert registry.nominal_type_name("User") == "UserId"
    assert registry.resolve_identifier_field("Post").name == "id"


def test_compound_key_model_is_skipped(models):
    registry = ModelRegistry(models)
    assert not registry.is_identified("Membership")
    assert registry.nominal_type_name("Membership") is None
    assert registry.skip_reason("Membership") == "compound primary key (userId, teamId)"


def test_model_without_string_id_is_skipped():
    registry = ModelRegistry(
        convert_datamodel(
            {"models": [_model("AuditLog", [_field("id", type_="Int", is_id=True)])]}
        )
    )
    assert registry.identified_models() == []
    assert "no string field 'id'" in registry.skip_reason("AuditLog")


def test_foreign_key_targets(models):
    registry = ModelRegistry(models)
    assert registry.foreign_key_targets("Post") == [
        ForeignKey("authorId", "User", "author"),
        ForeignKey("editorId", "User", "editor"),
    ]
    assert registry.foreign_key_targets("Session") == []


def test_foreign_key_owners_excludes_false_friends(models):
    registry = ModelRegistry(models)
    # Session.userId is a plain column, Membership has no nominal type
    assert registry.foreign_key_owners("User", "userId") == ["Comment"]
    assert registry.foreign_key_owners("Post", "postId") == ["Comment"]
    assert registry.foreign_key_owners("Team", "teamId") == []


def test_foreign_key_resolved_regardless_of_model_order():
    post = _model(
        "Post",
        [
            _field("id", is_id=True),
            _field("authorId"),
            _field("author", type_="User", kind="object",
                   relationFromFields=["authorId"], relationToFields=["id"]),
        ],
    )
    user = _model("User", [_field("id", is_id=True)])
    registry = ModelRegistry(convert_datamodel({"models": [post, user]}))
    assert registry.foreign_key_targets("Post") == [ForeignKey("authorId", "User", "author")]


def test_composite_relation_only_keys_paired_with_identifier():
    tenant = _model("Tenant", [_field("id", is_id=True), _field("slug")])
    invoice = _model(
        "Invoice",
        [
            _field("id", is_id=True),
            _field("tenantId"),
            _field("tenantSlug"),
            _field("tenant", type_="Tenant", kind="object",
                   relationFromFields=["tenantId", "tenantSlug"],
                   relationToFields=["id", "slug"]),
        ],
    )
    registry = ModelRegistry(convert_datamodel({"models": [tenant, invoice]}))
    assert [k.column for k in registry.foreign_key_targets("Invoice")] == ["tenantId"]


def test_owner_of_prefers_longest_model_name():
    registry = ModelRegistry(
        convert_datamodel(
            {
                "models": [
                    _model("Post", [_field("id", is_id=True)]),
                    _model("PostTag", [_field("id", is_id=True)]),
                ]
            }
        )
    )
    assert registry.owner_of("PostTagWhereInput") == "PostTag"
    assert registry.owner_of("$PostPayload") == "Post"
    assert registry.owner_of("PostCreateWithoutTagsInput") == "Post"
    assert registry.owner_of("Post") == "Post"
    assert registry.owner_of("Postal") is None
    assert registry.owner_of("UserWhereInput") is None


def test_convert_rejects_invalid_model_name():
    with pytest.raises(SchemaError):
        convert_datamodel({"models": [_model("Bad-Name", [_field("id", is_id=True)])]})
