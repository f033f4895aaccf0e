"""Database seeder: demo users, posts, comments and replies."""
import asyncio
import argparse
import random
import time
from datetime import datetime, timezone, timedelta

from blogsite.categories import Category as KnownCategory
from blogsite.database import engine, async_session, Base
from blogsite.models import BlogPost, Category, Comment, Reply, User
from blogsite.security import hash_password

DEMO_PASSWORD = "password123"

TOPICS = ["python", "fastapi", "postgresql", "design systems", "remote work",
          "mobile apps", "productivity", "startups", "testing", "security"]


async def seed(small: bool = False, reset: bool = False):
    num_users = 3 if small else 10
    num_posts = 12 if small else 200
    max_comments = 3 if small else 6

    print(f"Seeding: {num_users} users, {num_posts} posts, up to {max_comments} comments per post")
    start = time.perf_counter()

    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        for known in KnownCategory:
            await session.merge(Category(id=known.category_id, title=known.title))
        await session.flush()
        print(f"  Ensured {len(KnownCategory)} categories")

        # One bcrypt hash shared by every demo account.
        password_hash = hash_password(DEMO_PASSWORD)
        users = []
        for i in range(num_users):
            user = User(
                first_name=f"Demo{i}",
                last_name="Writer",
                email=f"demo{i}@example.com",
                password_hash=password_hash,
            )
            session.add(user)
            users.append(user)
        await session.flush()
        print(f"  Created {len(users)} users (password: {DEMO_PASSWORD})")

        total_comments = 0
        total_replies = 0
        for i in range(num_posts):
            author = random.choice(users)
            topic = random.choice(TOPICS)
            category = random.choice(list(KnownCategory))
            post = BlogPost(
                title=f"Post {i}: notes on {topic}",
                body=f"Some thoughts about {topic}. " * 20,
                author_display=author.email,
                created_at=datetime.now(timezone.utc) - timedelta(hours=random.randint(0, 24 * 90)),
                category_id=category.category_id,
                tag=topic.replace(" ", "-"),
                user_id=author.id,
            )
            session.add(post)
            await session.flush()

            for c in range(random.randint(0, max_comments)):
                reader = random.choice(users)
                comment = Comment(
                    blog_id=post.id,
                    name=reader.first_name,
                    email=reader.email,
                    message=f"Comment {c} on {topic}.",
                )
                session.add(comment)
                await session.flush()
                total_comments += 1

                for r in range(random.randint(0, 2)):
                    session.add(Reply(
                        comment_id=comment.id,
                        name=author.first_name,
                        email=author.email,
                        message=f"Reply {r}: thanks for reading!",
                    ))
                    total_replies += 1

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Users: {num_users}")
    print(f"  Posts: {num_posts}")
    print(f"  Comments: {total_comments}")
    print(f"  Replies: {total_replies}")


def main():
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument("--small", action="store_true", help="Use a small dataset (12 posts)")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small, reset=args.reset))


if __name__ == "__main__":
    main()
