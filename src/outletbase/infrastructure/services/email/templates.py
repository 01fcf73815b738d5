"""Built-in email templates (Jinja2)."""

INVITATION_SUBJECT = "You're invited to manage {{ outlet_name }}"

INVITATION_TEXT = """\
Hello,

{{ inviter_name }} has invited you to help manage {{ outlet_name }} on {{ app_name }}.

Accept the invitation here:
{{ invitation_url }}

The invitation is valid until {{ expires_at }} and can only be accepted
by signing in as {{ email }}.

If you did not expect this invitation, you can safely ignore this email.
"""

INVITATION_HTML = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Outlet Admin Invitation</title>
</head>
<body style="font-family: Arial, sans-serif; background-color: #FDF8F4; padding: 32px;">
  <table cellpadding="0" cellspacing="0" border="0" width="600" style="max-width: 600px; background: #ffffff; border-radius: 12px;">
    <tr>
      <td style="padding: 32px;">
        <h2 style="margin: 0 0 16px 0;">You've been invited!</h2>
        <p><strong>{{ inviter_name }}</strong> has invited you to manage their outlet:</p>
        <p style="font-size: 18px; font-weight: 600;">{{ outlet_name }}</p>
        <p>
          <a href="{{ invitation_url }}" style="display: inline-block; padding: 12px 24px; background: #E6658B; color: #ffffff; text-decoration: none; border-radius: 8px;">Accept invitation</a>
        </p>
        <p style="color: #666666; font-size: 13px;">
          This invitation expires on {{ expires_at }} and must be accepted while signed in as {{ email }}.
        </p>
      </td>
    </tr>
  </table>
</body>
</html>
"""
