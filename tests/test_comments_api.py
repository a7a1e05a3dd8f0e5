import asyncio
import threading
import unittest

from fastapi.testclient import TestClient

from main import app
from crud.crud_comment import comment as comment_crud
from db.json_store import json_store
from routers import comments as comments_router
import config


def make_review(name, rating, time="1 week ago", **extra):
    review = {
        "name": name,
        "userAvatar": "",
        "label": "",
        "reviewCount": "1",
        "photoCount": "0",
        "rating": rating,
        "time": time,
        "content": f"review by {name}",
        "reviewImages": [],
        "isUserAdd": True,
        "likeCount": 3,
        "isLiked": True,
    }
    review.update(extra)
    return review


class TestCommentsAPI(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def list_comments(self, sort=None):
        params = {"sort": sort} if sort is not None else None
        body = self.client.get("/api/comments", params=params).json()
        self.assertEqual(body["code"], 200)
        return body["data"]

    def test_seed_has_two_reviews(self):
        comments = self.list_comments()
        self.assertEqual(len(comments), 2)
        self.assertEqual(comments[0]["name"], "Link LL")

    def test_add_review_defaults_and_head_insert(self):
        body = self.client.post("/api/comments", json={"content": "Great!", "rating": 5}).json()
        self.assertEqual(body["code"], 200)
        created = body["data"]
        self.assertEqual(created["name"], "Guest")
        self.assertEqual(created["likeCount"], 0)
        self.assertFalse(created["isLiked"])
        self.assertTrue(created["isUserAdd"])
        self.assertEqual(created["label"], "")
        self.assertEqual(created["reviewCount"], "0")
        self.assertEqual(created["photoCount"], "0")
        self.assertEqual(created["time"], "Just now")
        self.assertTrue(created["id"])

        comments = self.list_comments()
        self.assertEqual(len(comments), 3)
        self.assertEqual(comments[0], created)

    def test_add_review_ignores_client_like_state(self):
        created = self.client.post("/api/comments", json={
            "content": "ok", "rating": "4", "likeCount": 99, "isLiked": True,
        }).json()["data"]
        self.assertEqual(created["rating"], 4)
        self.assertEqual(created["likeCount"], 0)
        self.assertFalse(created["isLiked"])

    def test_unparsable_rating_defaults_to_five(self):
        created = self.client.post("/api/comments", json={"content": "ok", "rating": "great"}).json()["data"]
        self.assertEqual(created["rating"], 5)

    def test_add_review_requires_content_and_rating(self):
        for payload in ({"rating": 5}, {"content": "hi"}, {"content": "", "rating": 5}, {"content": "hi", "rating": 0}):
            body = self.client.post("/api/comments", json=payload).json()
            self.assertEqual(body["code"], 400, payload)
        self.assertEqual(len(self.list_comments()), 2)

    def test_replace_round_trip_keeps_order(self):
        reviews = [make_review("z", 2), make_review("a", 5), make_review("m", 3)]
        body = self.client.put("/api/comments", json=reviews).json()
        self.assertEqual(body["code"], 200)
        self.assertEqual(self.list_comments(""), reviews)

    def test_replace_rejects_non_array(self):
        body = self.client.put("/api/comments", json={"name": "x"}).json()
        self.assertEqual(body["code"], 400)
        self.assertEqual(len(self.list_comments()), 2)

    def test_rating_sorts_are_reverses(self):
        self.client.put("/api/comments", json=[make_review("a", 3), make_review("b", 5), make_review("c", 1)])
        desc = [c["name"] for c in self.list_comments("rating/desc")]
        asc = [c["name"] for c in self.list_comments("rating/asc")]
        self.assertEqual(desc, ["b", "a", "c"])
        self.assertEqual(asc, list(reversed(desc)))

    def test_time_newest_sort(self):
        self.client.put("/api/comments", json=[
            make_review("old", 3, time="3 years ago"),
            make_review("recent", 3, time="a week ago"),
        ])
        names = [c["name"] for c in self.list_comments("time/newest")]
        self.assertEqual(names, ["recent", "old"])

    def test_delete_by_index_removes_record_and_files(self):
        avatar = json_store.upload_root / "avatars" / "me.png"
        photo = json_store.upload_root / "review-images" / "dish.png"
        avatar.write_bytes(b"a")
        photo.write_bytes(b"p")

        self.client.put("/api/comments", json=[
            make_review("first", 4, userAvatar="uploads/avatars/me.png", reviewImages=["uploads/review-images/dish.png"]),
            make_review("second", 5),
        ])

        body = self.client.delete("/api/comments/0").json()
        self.assertEqual(body["code"], 200)
        self.assertEqual([c["name"] for c in body["data"]], ["second"])
        self.assertEqual(self.list_comments()[0]["name"], "second")
        self.assertFalse(avatar.exists())
        self.assertFalse(photo.exists())

    def test_delete_out_of_range_or_bad_index(self):
        for index in ("2", "-1", "abc"):
            body = self.client.delete(f"/api/comments/{index}").json()
            self.assertEqual(body["code"], 400, index)
        self.assertEqual(len(self.list_comments()), 2)

    def test_delete_by_id(self):
        created = self.client.post("/api/comments", json={"content": "bye", "rating": 2}).json()["data"]
        self.client.post("/api/comments", json={"content": "newer", "rating": 4})

        body = self.client.delete(f"/api/comments/id/{created['id']}").json()
        self.assertEqual(body["code"], 200)
        self.assertNotIn(created["id"], [c.get("id") for c in self.list_comments()])
        self.assertEqual(len(self.list_comments()), 3)

    def test_delete_by_unknown_id(self):
        body = self.client.delete("/api/comments/id/does-not-exist").json()
        self.assertEqual(body["code"], 404)

    def test_missing_comments_file_lists_empty(self):
        json_store.path_for(config.COMMENTS_FILE).unlink()
        self.assertEqual(self.list_comments(), [])


class TestConcurrentWrites(unittest.TestCase):
    def test_json_routes_run_in_threadpool(self):
        """JSON 저장소 라우터는 일반 def - 이벤트 루프가 아니라 스레드풀에서 실행"""
        for handler in (
            comments_router.get_comments,
            comments_router.replace_comments,
            comments_router.add_comment,
            comments_router.delete_comment,
            comments_router.delete_comment_by_id,
        ):
            self.assertFalse(asyncio.iscoroutinefunction(handler), handler.__name__)

    def test_parallel_adds_are_all_kept(self):
        threads = [
            threading.Thread(
                target=comment_crud.add_comment,
                args=(json_store, {"content": f"parallel {i}", "rating": 5}),
            )
            for i in range(20)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        comments = json_store.read(config.COMMENTS_FILE)
        self.assertEqual(len(comments), 22)
        contents = {c["content"] for c in comments}
        self.assertTrue({f"parallel {i}" for i in range(20)} <= contents)


if __name__ == "__main__":
    unittest.main()
