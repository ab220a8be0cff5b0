"""
Example of the LinkedIn flow without the HTTP front end.
"""

import asyncio
import sys
from linkedin_publisher.config import get_settings
from linkedin_publisher.core import UpstreamError
from linkedin_publisher.platforms import LinkedInOAuth, to_organization

async def main():
    settings = get_settings()
    oauth = LinkedInOAuth(credentials=settings.linkedin_credentials, timeout=settings.HTTP_TIMEOUT)

    auth_url = await oauth.get_authorization_url(state=oauth.generate_state())
    print("\nAuthorization URL:")
    print(auth_url)

    # In a real app, user would be redirected to this URL
    code = input("\nEnter the authorization code: ")

    try:
        access_token = await oauth.get_access_token(code)
        pages = [to_organization(page) for page in await oauth.get_user_pages(access_token)]
        if not pages:
            print("No pages found for this user.")
            return

        for page in pages:
            print(f"{page.id}: {page.name}")

        image_path = sys.argv[1] if len(sys.argv) > 1 else None
        asset = None
        if image_path:
            asset = await oauth.upload_asset(access_token, pages[0].id, image_path)

        result = await oauth.create_post(access_token, pages[0].id, "Hello from LinkedIn API!", asset=asset)
        print("\nPost created:", result)

    except UpstreamError as e:
        print(f"Error: {str(e)}")

if __name__ == "__main__":
    asyncio.run(main())
