import json
from pathlib import Path

import pytest

from prisma_typed_ids.codegen import convert_datamodel

# Trimmed-down Prisma 5 client declarations. Team is in the datamodel but
# deliberately absent here; Membership has a compound key; Session carries a
# `userId` column that is not a relation.
DECLARATIONS = '''\
/**
 * Client
**/

import * as runtime from './runtime/library.js';
import $Types = runtime.Types // general types
import $Public = runtime.Types.Public
import $Utils = runtime.Types.Utils
import $Extensions = runtime.Types.Extensions
import $Result = runtime.Types.Result

export type PrismaPromise<T> = $Public.PrismaPromise<T>


export type $UserPayload<ExtArgs extends $Extensions.InternalArgs = $Extensions.DefaultArgs> = {
  name: "User"
  objects: {
    posts: Prisma.$PostPayload<ExtArgs>[]
    comments: Prisma.$CommentPayload<ExtArgs>[]
  }
  scalars: $Extensions.GetPayloadResult<{
    id: string
    email: string
    name: string | null
  }, ExtArgs["result"]["user"]>
  composites: {}
}

/**
 * Model User
 *
 */
export type User = $Result.DefaultSelection<Prisma.$UserPayload>

export type $PostPayload<ExtArgs extends $Extensions.InternalArgs = $Extensions.DefaultArgs> = {
  name: "Post"
  objects: {
    author: Prisma.$UserPayload<ExtArgs>
    editor: Prisma.$UserPayload<ExtArgs> | null
    comments: Prisma.$CommentPayload<ExtArgs>[]
  }
  scalars: $Extensions.GetPayloadResult<{
    id: string
    title: string
    authorId: string
    editorId: string | null
  }, ExtArgs["result"]["post"]>
  composites: {}
}

/**
 * Model Post
 *
 */
export type Post = $Result.DefaultSelection<Prisma.$PostPayload>

export type $CommentPayload<ExtArgs extends $Extensions.InternalArgs = $Extensions.DefaultArgs> = {
  name: "Comment"
  objects: {
    post: Prisma.$PostPayload<ExtArgs>
    user: Prisma.$UserPayload<ExtArgs>
  }
  scalars: $Extensions.GetPayloadResult<{
    id: string
    body: string
    postId: string
    userId: string
  }, ExtArgs["result"]["comment"]>
  composites: {}
}

/**
 * Model Comment
 *
 */
export type Comment = $Result.DefaultSelection<Prisma.$CommentPayload>

export type $SessionPayload<ExtArgs extends $Extensions.InternalArgs = $Extensions.DefaultArgs> = {
  name: "Session"
  objects: {}
  scalars: $Extensions.GetPayloadResult<{
    id: string
    userId: string
    expiresAt: Date
  }, ExtArgs["result"]["session"]>
  composites: {}
}

/**
 * Model Session
 *
 */
export type Session = $Result.DefaultSelection<Prisma.$SessionPayload>

export type $MembershipPayload<ExtArgs extends $Extensions.InternalArgs = $Extensions.DefaultArgs> = {
  name: "Membership"
  objects: {
    user: Prisma.$UserPayload<ExtArgs>
  }
  scalars: $Extensions.GetPayloadResult<{
    userId: string
    teamId: string
    role: string
  }, ExtArgs["result"]["membership"]>
  composites: {}
}

/**
 * Model Membership
 *
 */
export type Membership = $Result.DefaultSelection<Prisma.$MembershipPayload>

export namespace Prisma {

  export type UserWhereInput = {
    AND?: UserWhereInput | UserWhereInput[]
    OR?: UserWhereInput[]
    NOT?: UserWhereInput | UserWhereInput[]
    id?: StringFilter<"User"> | string
    email?: StringFilter<"User"> | string
    name?: StringNullableFilter<"User"> | string | null
    posts?: PostListRelationFilter
  }

  export type UserWhereUniqueInput = Prisma.AtLeast<{
    id?: string
    email?: string
    AND?: UserWhereInput | UserWhereInput[]
    OR?: UserWhereInput[]
    NOT?: UserWhereInput | UserWhereInput[]
    name?: StringNullableFilter<"User"> | string | null
  }, "id" | "email">

  export type UserCreateInput = {
    id?: string
    email: string
    name?: string | null
    posts?: PostCreateNestedManyWithoutAuthorInput
  }

  export type UserUpdateInput = {
    id?: StringFieldUpdateOperationsInput | string
    email?: StringFieldUpdateOperationsInput | string
    name?: NullableStringFieldUpdateOperationsInput | string | null
    posts?: PostUpdateManyWithoutAuthorNestedInput
  }

  export type UserCreateWithoutPostsInput = {
    id?: string
    email: string
    name?: string | null
  }

  export type PostWhereInput = {
    AND?: PostWhereInput | PostWhereInput[]
    id?: StringFilter<"Post"> | string
    title?: StringFilter<"Post"> | string
    authorId?: StringFilter<"Post"> | string
    editorId?: StringNullableFilter<"Post"> | string | null
    author?: XOR<UserRelationFilter, UserWhereInput>
  }

  export type PostWhereUniqueInput = Prisma.AtLeast<{
    id?: string
    AND?: PostWhereInput | PostWhereInput[]
    title?: StringFilter<"Post"> | string
    authorId?: StringFilter<"Post"> | string
  }, "id">

  export type PostUncheckedCreateInput = {
    id?: string
    title: string
    authorId: string
    editorId?: string | null
  }

  export type PostUncheckedUpdateInput = {
    id?: StringFieldUpdateOperationsInput | string
    title?: StringFieldUpdateOperationsInput | string
    authorId?: StringFieldUpdateOperationsInput | string
    editorId?: NullableStringFieldUpdateOperationsInput | string | null
  }

  export type PostCreateWithoutAuthorInput = {
    id?: string
    title: string
    editor?: UserCreateNestedOneWithoutEditedPostsInput
  }

  export type CommentWhereInput = {
    id?: StringFilter<"Comment"> | string
    body?: StringFilter<"Comment"> | string
    postId?: StringFilter<"Comment"> | string
    userId?: StringFilter<"Comment"> | string
  }

  export type CommentUncheckedCreateInput = {
    id?: string
    body: string
    postId: string
    userId: string
  }

  export type SessionWhereInput = {
    id?: StringFilter<"Session"> | string
    userId?: StringFilter<"Session"> | string
    expiresAt?: DateTimeFilter<"Session"> | Date | string
  }

  export type SessionUncheckedCreateInput = {
    id?: string
    userId: string
    expiresAt: Date | string
  }

  export type MembershipWhereInput = {
    userId?: StringFilter<"Membership"> | string
    teamId?: StringFilter<"Membership"> | string
    role?: StringFilter<"Membership"> | string
  }

  export type MembershipUncheckedCreateInput = {
    userId: string
    teamId: string
    role: string
  }
}
'''


def _scalar(name, type_="String", is_id=False, required=True):
    return {
        "name": name,
        "kind": "scalar",
        "type": type_,
        "isId": is_id,
        "isRequired": required,
        "isList": False,
        "relationFromFields": [],
        "relationToFields": [],
    }


def _relation(name, target, relation_name, from_fields=(), to_fields=(), is_list=False):
    return {
        "name": name,
        "kind": "object",
        "type": target,
        "isId": False,
        "isList": is_list,
        "relationName": relation_name,
        "relationFromFields": list(from_fields),
        "relationToFields": list(to_fields),
    }


def build_dmmf():
    """DMMF document matching DECLARATIONS, models in schema order."""
    return {
        "datamodel": {
            "enums": [],
            "types": [],
            "models": [
                {
                    "name": "User",
                    "primaryKey": None,
                    "fields": [
                        _scalar("id", is_id=True),
                        _scalar("email"),
                        _scalar("name", required=False),
                        _relation("posts", "Post", "PostAuthor", is_list=True),
                        _relation("editedPosts", "Post", "PostEditor", is_list=True),
                        _relation("comments", "Comment", "CommentToUser", is_list=True),
                        _relation("memberships", "Membership", "MembershipToUser", is_list=True),
                    ],
                },
                {
                    "name": "Post",
                    "primaryKey": None,
                    "fields": [
                        _scalar("id", is_id=True),
                        _scalar("title"),
                        _scalar("authorId"),
                        _relation("author", "User", "PostAuthor", ["authorId"], ["id"]),
                        _scalar("editorId", required=False),
                        _relation("editor", "User", "PostEditor", ["editorId"], ["id"]),
                        _relation("comments", "Comment", "CommentToPost", is_list=True),
                    ],
                },
                {
                    "name": "Comment",
                    "primaryKey": None,
                    "fields": [
                        _scalar("id", is_id=True),
                        _scalar("body"),
                        _scalar("postId"),
                        _relation("post", "Post", "CommentToPost", ["postId"], ["id"]),
                        _scalar("userId"),
                        _relation("user", "User", "CommentToUser", ["userId"], ["id"]),
                    ],
                },
                {
                    "name": "Session",
                    "primaryKey": None,
                    "fields": [
                        _scalar("id", is_id=True),
                        _scalar("userId"),
                        _scalar("expiresAt", type_="DateTime"),
                    ],
                },
                {
                    "name": "Team",
                    "primaryKey": None,
                    "fields": [
                        _scalar("id", is_id=True),
                        _relation("memberships", "Membership", "MembershipToTeam", is_list=True),
                    ],
                },
                {
                    "name": "Membership",
                    "primaryKey": {"name": None, "fields": ["userId", "teamId"]},
                    "fields": [
                        _scalar("userId"),
                        _relation("user", "User", "MembershipToUser", ["userId"], ["id"]),
                        _scalar("teamId"),
                        _relation("team", "Team", "MembershipToTeam", ["teamId"], ["id"]),
                        _scalar("role"),
                    ],
                },
            ],
        }
    }


@pytest.fixture()
def declarations():
    return DECLARATIONS


@pytest.fixture()
def dmmf():
    return build_dmmf()


@pytest.fixture()
def models(dmmf):
    return convert_datamodel(dmmf)


@pytest.fixture()
def declarations_file(tmp_path: Path):
    path = tmp_path / "index.d.ts"
    path.write_text(DECLARATIONS, encoding="utf-8")
    return path


@pytest.fixture()
def dmmf_file(tmp_path: Path):
    path = tmp_path / "dmmf.json"
    path.write_text(json.dumps(build_dmmf()), encoding="utf-8")
    return path
