from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import ModeratorFactory, UserFactory
from infrastructure.container import container
from marketplace.models import ContentFlag, Review, Vote
from marketplace.tests.factories import CodeRepoFactory, CommentFactory, ReviewFactory


class ReviewViewIntegrationTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.user = UserFactory()
        self.repo = CodeRepoFactory()
        self.review_list_url = reverse("marketplace:review-list")

    def test_list_requires_repo_id(self):
        response = self.client.get(self.review_list_url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_by_repo(self):
        ReviewFactory(code_repo=self.repo)
        ReviewFactory()

        response = self.client.get(self.review_list_url, {"repo_id": str(self.repo.id)})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_create_requires_login(self):
        response = self.client.post(
            self.review_list_url, {"repo_id": str(self.repo.id), "content": "Nice", "rating": 5}, format="json"
        )

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_create_flags_profanity(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(
            self.review_list_url, {"repo_id": str(self.repo.id), "content": "total shit", "rating": 1}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["flag"], ContentFlag.INAPPROPRIATE_LANGUAGE)

    def test_rating_validated(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(
            self.review_list_url, {"repo_id": str(self.repo.id), "content": "ok", "rating": 9}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_other_user_cannot_edit(self):
        review = ReviewFactory()
        self.client.force_authenticate(user=self.user)

        response = self.client.patch(
            reverse("marketplace:review-detail", args=[review.id]), {"content": "mine now"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_upvote(self):
        review = ReviewFactory()
        self.client.force_authenticate(user=self.user)

        response = self.client.post(reverse("marketplace:review-upvote", args=[review.id]))

        self.assertEqual(response.data["upvotes"], 1)

    def test_moderation_queue_requires_moderator(self):
        ReviewFactory(flag=ContentFlag.SPAM)
        self.client.force_authenticate(user=self.user)
        self.assertEqual(
            self.client.get(reverse("marketplace:review-flagged")).status_code, status.HTTP_403_FORBIDDEN
        )

        self.client.force_authenticate(user=ModeratorFactory())
        response = self.client.get(reverse("marketplace:review-flagged"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_moderator_reverts_flag(self):
        review = ReviewFactory(flag=ContentFlag.OFF_TOPIC)
        self.client.force_authenticate(user=ModeratorFactory())

        response = self.client.post(reverse("marketplace:review-revert-flag", args=[review.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        review.refresh_from_db()
        self.assertEqual(review.flag, ContentFlag.NONE)


class CommentViewIntegrationTest(TestCase):
    def setUp(self):
        container.configure_for_testing()
        self.client = APIClient()
        self.user = UserFactory()
        self.review = ReviewFactory()

    def test_create_and_list(self):
        self.client.force_authenticate(user=self.user)
        self.client.post(
            reverse("marketplace:comment-list"), {"review_id": str(self.review.id), "content": "+1"}, format="json"
        )

        response = self.client.get(reverse("marketplace:comment-list"), {"review_id": str(self.review.id)})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["meta"]["total"], 1)
        self.assertEqual(response.data["data"][0]["content"], "+1")

    def test_too_long_comment_rejected(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(
            reverse("marketplace:comment-list"),
            {"review_id": str(self.review.id), "content": "x" * 1001},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_vote_toggle(self):
        comment = CommentFactory(review=self.review)
        self.client.force_authenticate(user=self.user)
        url = reverse("marketplace:comment-vote", args=[comment.id])

        first = self.client.post(url, {"type": Vote.UPVOTE}, format="json")
        second = self.client.post(url, {"type": Vote.UPVOTE}, format="json")

        self.assertEqual(first.data["upvotes"], 1)
        self.assertEqual(second.data["upvotes"], 0)
        self.assertFalse(Vote.objects.exists())

    def test_delete_own_comment(self):
        comment = CommentFactory(review=self.review, user=self.user)
        self.client.force_authenticate(user=self.user)

        response = self.client.delete(reverse("marketplace:comment-detail", args=[comment.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertTrue(Review.objects.filter(id=self.review.id).exists())
