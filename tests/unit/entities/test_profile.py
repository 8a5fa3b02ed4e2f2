"""Unit tests for the Profile aggregate."""

from datetime import date, datetime, timedelta
from uuid import uuid4

from domain.entities.profile import Experience, Profile, SocialLinks, parse_skills


class TestParseSkills:
    def test_splits_and_trims(self):
        assert parse_skills("node, react , css") == ["node", "react", "css"]

    def test_drops_empty_pieces(self):
        assert parse_skills("python,, ,sql,") == ["python", "sql"]

    def test_only_separators_yields_nothing(self):
        assert parse_skills(" , ,") == []


class TestSocialLinks:
    def test_merge_keeps_links_not_supplied(self):
        social = SocialLinks(twitter="https://t/old", linkedin="https://l/me")

        social.merge(twitter="https://t/new", youtube=None, facebook="")

        assert social.twitter == "https://t/new"
        assert social.linkedin == "https://l/me"
        assert social.facebook is None

    def test_as_dict_omits_unset_links(self):
        assert SocialLinks(youtube="https://y/me").as_dict() == {"youtube": "https://y/me"}


class TestProfile:
    def test_remove_experience_touches_only_on_hit(self):
        old = datetime.utcnow() - timedelta(days=1)
        entry = Experience(title="Dev", company="Acme", from_date=date(2019, 5, 1))
        profile = Profile(
            user_id=uuid4(),
            status="Developer",
            skills=["python"],
            created_at=old,
            updated_at=old,
        )
        profile.experience.push_front(entry)

        assert profile.remove_experience(uuid4()) is None
        assert profile.updated_at == old

        assert profile.remove_experience(entry.id) is entry
        assert profile.updated_at > old

    def test_updated_at_never_before_created_at(self):
        now = datetime.utcnow()
        profile = Profile(
            user_id=uuid4(),
            status="Developer",
            skills=["python"],
            created_at=now,
            updated_at=now - timedelta(hours=1),
        )

        assert profile.updated_at == now
