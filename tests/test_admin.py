import pytest

from core.security import verify_password
from models.blog import Blog
from models.user import User


@pytest.fixture
def seven_users(make_user, admin):
    # admin + 6 more = 7 rows
    return [make_user(f"user{i}") for i in range(6)]


class TestGuards:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/admin/users"),
            ("post", "/api/admin/users"),
            ("put", "/api/admin/users/1"),
            ("delete", "/api/admin/users/1"),
            ("get", "/api/admin/blogs"),
            ("delete", "/api/admin/blogs/1"),
            ("get", "/api/admin/dashboard-stats"),
        ],
    )
    def test_anonymous_401_user_403(self, client, alice_headers, method, path):
        kwargs = {"json": {}} if method in ("post", "put") else {}
        assert getattr(client, method)(path, **kwargs).status_code == 401
        assert getattr(client, method)(path, headers=alice_headers, **kwargs).status_code == 403


class TestUsers:
    def test_list_is_paged_by_five(self, client, admin_headers, seven_users):
        data = client.get("/api/admin/users", headers=admin_headers).json()
        assert len(data["users"]) == 5
        assert data["page"] == 1 and data["pages"] == 2 and data["total"] == 7
        assert all("password" not in u and "password_hash" not in u for u in data["users"])

        data = client.get("/api/admin/users", params={"page": 2}, headers=admin_headers).json()
        assert len(data["users"]) == 2

    def test_legacy_page_number_param(self, client, admin_headers, seven_users):
        data = client.get("/api/admin/users", params={"pageNumber": 2}, headers=admin_headers).json()
        assert data["page"] == 2

    @pytest.mark.parametrize("param", ["page", "pageNumber"])
    def test_out_of_range_page_falls_back(self, client, admin_headers, seven_users, param):
        response = client.get("/api/admin/users", params={param: "99999999999999999999"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["page"] == 1
        assert len(response.json()["users"]) == 5

    def test_create_with_role(self, client, db, admin_headers):
        response = client.post(
            "/api/admin/users",
            json={"username": "editor", "email": "editor@x.com", "password": "secret1", "role": "admin"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["role"] == "admin"
        user = db.query(User).filter(User.username == "editor").one()
        assert verify_password("secret1", user.password_hash)

    def test_create_duplicate_email(self, client, alice, admin_headers):
        response = client.post(
            "/api/admin/users",
            json={"username": "alice2", "email": "alice@x.com", "password": "secret1"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"

    def test_create_strips_username(self, client, bob, admin_headers):
        response = client.post(
            "/api/admin/users",
            json={"username": " bob ", "email": "bob2@x.com", "password": "secret1"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"

        response = client.post(
            "/api/admin/users",
            json={"username": "  carol ", "email": "carol@x.com", "password": "secret1"},
            headers=admin_headers,
        )
        assert response.json()["username"] == "carol"

    def test_create_bad_role(self, client, admin_headers):
        response = client.post(
            "/api/admin/users",
            json={"username": "x-man", "email": "x@x.com", "password": "secret1", "role": "root"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "role"

    def test_update_partial(self, client, db, alice, admin_headers):
        response = client.put(f"/api/admin/users/{alice.id}", json={"role": "admin"}, headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "admin"
        assert data["username"] == "alice"
        assert data["email"] == "alice@x.com"

    def test_update_password_replaces_hash(self, client, db, alice, admin_headers):
        client.put(f"/api/admin/users/{alice.id}", json={"password": "newpass1"}, headers=admin_headers)
        db.expire_all()
        user = db.get(User, alice.id)
        assert verify_password("newpass1", user.password_hash)
        assert not verify_password("secret1", user.password_hash)

    def test_update_empty_password_keeps_hash(self, client, db, alice, admin_headers):
        before = alice.password_hash
        client.put(f"/api/admin/users/{alice.id}", json={"password": "", "username": "alicia"}, headers=admin_headers)
        db.expire_all()
        user = db.get(User, alice.id)
        assert user.password_hash == before
        assert user.username == "alicia"

    def test_update_onto_taken_username(self, client, alice, bob, admin_headers):
        response = client.put(f"/api/admin/users/{alice.id}", json={"username": "bob"}, headers=admin_headers)
        assert response.status_code == 400

    def test_update_missing(self, client, admin_headers):
        assert client.put("/api/admin/users/999", json={"role": "user"}, headers=admin_headers).status_code == 404

    def test_out_of_range_user_id(self, client, admin_headers):
        huge = "99999999999999999999"
        assert client.put(f"/api/admin/users/{huge}", json={}, headers=admin_headers).status_code == 400
        assert client.delete(f"/api/admin/users/{huge}", headers=admin_headers).status_code == 400
        assert client.delete(f"/api/admin/blogs/{huge}", headers=admin_headers).status_code == 400

    def test_delete_orphans_posts(self, client, db, alice, admin_headers):
        db.add(Blog(title="Left Behind", slug="left-behind", content="x", category="Design", user_id=alice.id))
        db.commit()
        response = client.delete(f"/api/admin/users/{alice.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"msg": "User removed"}
        db.expire_all()
        assert db.get(User, alice.id) is None
        assert db.query(Blog).filter(Blog.slug == "left-behind").one().user_id is None

    def test_delete_missing(self, client, admin_headers):
        assert client.delete("/api/admin/users/999", headers=admin_headers).status_code == 404


class TestBlogs:
    def _seed(self, db, owner, n):
        for i in range(n):
            db.add(Blog(title=f"B{i}", slug=f"b{i}", content="x", category="Technology", user_id=owner.id))
        db.commit()

    def test_list_paged_by_five(self, client, db, alice, admin_headers):
        self._seed(db, alice, 6)
        data = client.get("/api/admin/blogs", headers=admin_headers).json()
        assert len(data["blogs"]) == 5
        assert data["pages"] == 2 and data["total"] == 6

    def test_delete_any(self, client, db, alice, admin_headers):
        self._seed(db, alice, 1)
        blog_id = db.query(Blog.id).scalar()
        response = client.delete(f"/api/admin/blogs/{blog_id}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get(f"/api/blogs/{blog_id}").status_code == 404

    def test_delete_missing(self, client, admin_headers):
        assert client.delete("/api/admin/blogs/999", headers=admin_headers).status_code == 404


def test_dashboard_stats(client, db, alice, admin_headers):
    for i, category in enumerate(["Design", "Design", "Technology"]):
        db.add(Blog(title=f"S{i}", slug=f"s{i}", content="x", category=category, user_id=alice.id))
    db.commit()

    data = client.get("/api/admin/dashboard-stats", headers=admin_headers).json()
    assert data["total_posts"] == 3
    assert data["total_users"] == 2
    assert data["categories"][0] == {"name": "Design", "count": 2}
    assert data["categories"][1] == {"name": "Technology", "count": 1}
    assert len(data["categories"]) == 7
    assert data["categories"][2] == {"name": "Artificial Intelligence", "count": 0}
